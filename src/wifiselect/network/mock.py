"""Mock network backend for development and testing.

Provides an in-memory stand-in for NetworkManager when running on a
machine without WiFi hardware or nmcli.
"""

import logging
from dataclasses import dataclass, field

from ..core.errors import BackendError
from .backend import ScanRecord, WifiBackend

logger = logging.getLogger(__name__)


@dataclass
class ConnectCall:
    """A connect request received by the mock backend."""

    ssid: str
    password: str | None = None
    saved_profile: bool = False


class MockWifiBackend(WifiBackend):
    """In-memory WifiBackend.

    Successful connects mark the network active, so a second attempt in
    the same process reports it as already connected, like the real
    NetworkManager would.

    Usage:
        backend = MockWifiBackend(
            [ScanRecord("Home", 80, "WPA2")],
            passwords={"Home": "secret"},
        )
        backend.connect_new("Home", "secret")
        assert backend.calls[-1].ssid == "Home"
    """

    def __init__(
        self,
        records: list[ScanRecord] | None = None,
        saved: list[str] | None = None,
        active: list[str] | None = None,
        passwords: dict[str, str] | None = None,
        broken_profiles: list[str] | None = None,
    ) -> None:
        """Initialize mock backend.

        Args:
            records: Scan rows to report
            saved: Names of saved connection profiles
            active: Names of profiles that are currently up
            passwords: Required password per SSID for new connections
            broken_profiles: Saved profiles that fail to come up
        """
        self.records = list(records or [])
        self.saved = list(saved or [])
        self.active = list(active or [])
        self.passwords = dict(passwords or {})
        self.broken_profiles = set(broken_profiles or [])
        self.calls: list[ConnectCall] = []

    def scan(self) -> list[ScanRecord]:
        logger.debug("MockWifiBackend: scan -> %d rows", len(self.records))
        return list(self.records)

    def list_profiles(self, active: bool = False) -> list[str]:
        if active:
            return list(self.active)
        return list(dict.fromkeys(self.saved + self.active))

    def connect_profile(self, name: str) -> None:
        self.calls.append(ConnectCall(ssid=name, saved_profile=True))

        if name not in self.saved:
            raise BackendError(
                f"unknown connection '{name}'",
                reason=f"Error: unknown connection '{name}'.",
            )
        if name in self.broken_profiles:
            raise BackendError(
                "Connection activation failed",
                reason="Error: Connection activation failed: Secrets were required, but not provided.",
            )
        self._activate(name)

    def connect_new(self, ssid: str, password: str | None = None) -> None:
        self.calls.append(ConnectCall(ssid=ssid, password=password))

        if not any(r.ssid == ssid for r in self.records):
            raise BackendError(
                "No network with SSID found",
                reason=f"Error: No network with SSID '{ssid}' found.",
            )

        required = self.passwords.get(ssid)
        if required is not None and password != required:
            raise BackendError(
                "Connection activation failed",
                reason="Error: Connection activation failed: Secrets were required, but not provided.",
            )

        # NetworkManager saves a profile named after the SSID on success
        if ssid not in self.saved:
            self.saved.append(ssid)
        self._activate(ssid)

    def _activate(self, name: str) -> None:
        self.active = [name]
        logger.debug("MockWifiBackend: %s is now active", name)


def demo_backend() -> MockWifiBackend:
    """Backend populated with a small neighbourhood of networks for --mock."""
    return MockWifiBackend(
        records=[
            ScanRecord("HomeNet", 78, "WPA2"),
            ScanRecord("CoffeeShop", 64, "--"),
            ScanRecord("HomeNet", 41, "WPA2"),
            ScanRecord("", 55, "WPA2"),
            ScanRecord("Neighbor_5G", 52, "WPA2 WPA3"),
            ScanRecord("Office", 47, "WPA2 802.1X"),
            ScanRecord("Library-Guest", 33, ""),
            ScanRecord("PrinterDirect", 20, "WPA2"),
        ],
        saved=["Office"],
        passwords={"HomeNet": "password123", "Neighbor_5G": "letmein"},
    )
