"""Backend interface to the OS network manager.

Everything the selector knows about the radio comes through a WifiBackend.
The real implementation shells out to nmcli; tests and ``--mock`` use an
in-memory one.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

# nmcli prints "--" for a network with no security.
OPEN_PLACEHOLDERS = frozenset({"", "--"})


def is_open_security(security: str) -> bool:
    """True if a security descriptor means no credential is needed."""
    return security.strip() in OPEN_PLACEHOLDERS


@dataclass(frozen=True)
class ScanRecord:
    """One row of scan output, exactly as the backend reported it."""

    ssid: str  # empty for hidden networks
    signal: int  # 0-100
    security: str  # "WPA2", "WPA1 WPA2", "--", ""

    @property
    def is_open(self) -> bool:
        """True if the network needs no credential."""
        return is_open_security(self.security)


class WifiBackend(ABC):
    """Operations the selector needs from a network manager."""

    @abstractmethod
    def scan(self) -> list[ScanRecord]:
        """List every visible wireless network.

        Returns:
            Scan rows in backend order, hidden networks and duplicates included
        """

    @abstractmethod
    def list_profiles(self, active: bool = False) -> list[str]:
        """List connection profile names.

        Args:
            active: Only return profiles that are currently up

        Returns:
            Profile names
        """

    @abstractmethod
    def connect_profile(self, name: str) -> None:
        """Bring up a saved connection profile.

        Raises:
            BackendError: If the profile could not be activated
        """

    @abstractmethod
    def connect_new(self, ssid: str, password: str | None = None) -> None:
        """Connect to a network that has no saved profile.

        Args:
            ssid: Network SSID
            password: Credential for secured networks, None for open ones

        Raises:
            BackendError: If the connection attempt failed
        """
