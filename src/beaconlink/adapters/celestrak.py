# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
CelesTrak adapter: fetches relay element sets as two-line text.

External dependencies (urllib, file I/O) are confined to this layer.

Data source:
    CelesTrak GP API: https://celestrak.org/NORAD/elements/gp.php
    Groups: IRIDIUM, IRIDIUM-NEXT, ORBCOMM, GLOBALSTAR, etc.

On network failure the source falls back to the built-in relay
constellation rather than leaving the simulation without relays.
"""
import logging
import urllib.error
import urllib.request
from typing import Callable
from urllib.parse import quote

from beaconlink.domain.constellation import default_relay_element_sets
from beaconlink.domain.element_set import ElementSet, parse_tle_text
from beaconlink.ports.relay_source import RelayElementSource


_log = logging.getLogger(__name__)

BASE_URL = "https://celestrak.org/NORAD/elements/gp.php"
DEFAULT_GROUP = "iridium"


class CelesTrakRelaySource(RelayElementSource):
    """
    Fetches the relay constellation's current element sets from CelesTrak.

    Rate limiting: CelesTrak updates at most every 2 hours; callers that
    run repeatedly should cache the result.
    """

    def __init__(
        self,
        group: str = DEFAULT_GROUP,
        base_url: str = BASE_URL,
        timeout: int = 30,
        fallback: Callable[[], list[ElementSet]] | None = default_relay_element_sets,
    ):
        self._group = group
        self._base_url = base_url
        self._timeout = timeout
        self._fallback = fallback

    @property
    def url(self) -> str:
        return f"{self._base_url}?GROUP={quote(self._group)}&FORMAT=tle"

    def fetch_relay_element_sets(self) -> list[ElementSet]:
        try:
            element_sets = parse_tle_text(self._fetch_text(self.url))
        except ConnectionError as e:
            if self._fallback is None:
                raise
            _log.warning("%s; falling back to built-in relay element sets", e)
            return self._fallback()

        if not element_sets and self._fallback is not None:
            _log.warning("CelesTrak returned no element sets for %s; using built-in defaults",
                         self._group)
            return self._fallback()

        _log.info("Fetched %d element sets for group %s", len(element_sets), self._group)
        return element_sets

    def _fetch_text(self, url: str) -> str:
        """Fetch TLE text from CelesTrak API."""
        req = urllib.request.Request(url, headers={"User-Agent": "BeaconLink/1.0"})
        try:
            with urllib.request.urlopen(req, timeout=self._timeout) as response:
                text = response.read().decode('utf-8')
        except urllib.error.HTTPError as e:
            raise ConnectionError(f"CelesTrak API error {e.code}: {e.reason}") from e
        except urllib.error.URLError as e:
            raise ConnectionError(f"CelesTrak connection failed: {e.reason}") from e
        except TimeoutError as e:
            raise ConnectionError(f"CelesTrak request timed out after {self._timeout} s") from e
        except UnicodeDecodeError as e:
            raise ConnectionError(f"CelesTrak response is not valid UTF-8: {e.reason}") from e
        if text.strip() == "No GP data found":
            return ""
        return text


class FileRelaySource(RelayElementSource):
    """Reads relay element sets from a local TLE file."""

    def __init__(self, path: str):
        self._path = path

    def fetch_relay_element_sets(self) -> list[ElementSet]:
        with open(self._path, encoding='utf-8') as f:
            element_sets = parse_tle_text(f.read())
        _log.info("Loaded %d element sets from %s", len(element_sets), self._path)
        return element_sets


class BuiltinRelaySource(RelayElementSource):
    """Serves the built-in relay constellation without any network access."""

    def fetch_relay_element_sets(self) -> list[ElementSet]:
        return default_relay_element_sets()
