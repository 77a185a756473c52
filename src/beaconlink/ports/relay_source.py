# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for relay constellation element sets.

Adapters handle the actual HTTP/file access and apply their own
fallback policy; an empty result means no relay data is usable.
"""
from typing import Protocol, runtime_checkable

from beaconlink.domain.element_set import ElementSet


@runtime_checkable
class RelayElementSource(Protocol):
    """Port for fetching the relay constellation's current element sets."""

    def fetch_relay_element_sets(self) -> list[ElementSet]:
        """Fetch element sets, one per relay satellite."""
        ...
