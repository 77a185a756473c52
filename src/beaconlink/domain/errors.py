# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Error taxonomy for Beacon relay simulations.

Input and synthesis errors are ValueErrors and abort a run before the
first step. PropagationFailure is recovered per body and per step.
NoUsableRelayData aborts a run that has nothing to test against.
"""
from datetime import datetime


class BeaconLinkError(Exception):
    """Base class for all simulation errors."""


class InvalidOrbitParameters(BeaconLinkError, ValueError):
    """User orbit intent or simulation settings outside their domain."""


class ElementSynthesisFailure(BeaconLinkError, ValueError):
    """The Beacon element set could not be built or formatted."""


class PropagationFailure(BeaconLinkError, RuntimeError):
    """The propagator could not produce a finite state for one body at one instant."""

    def __init__(
        self,
        body_id: str,
        timestamp: datetime | None,
        reason: str,
        error_code: int | None = None,
    ):
        self.body_id = body_id
        self.timestamp = timestamp
        self.reason = reason
        self.error_code = error_code
        when = timestamp.isoformat() if timestamp else "initialisation"
        code = f" (SGP4 error {error_code})" if error_code is not None else ""
        super().__init__(f"Propagation failed for {body_id} at {when}{code}: {reason}")


class NoUsableRelayData(BeaconLinkError, RuntimeError):
    """No relay element set is available, or none can be propagated."""
