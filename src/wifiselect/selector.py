"""Network selection and connection flow.

Ranks scan results into a short-list and connects to a chosen network,
reusing an active or saved NetworkManager profile when one exists.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from .console import Console
from .core.errors import (
    BackendError,
    ConnectError,
    InvalidSelectionError,
    NetworkNotFoundError,
    SavedProfileError,
    ScanError,
)
from .network.backend import ScanRecord, WifiBackend, is_open_security
from .prompt import InputProvider

logger = logging.getLogger(__name__)

DEFAULT_MAX_NETWORKS = 5


@dataclass(frozen=True)
class NetworkEntry:
    """A visible network as shown in the short-list."""

    ssid: str
    signal: int  # 0-100
    security: str  # raw descriptor from the backend

    @property
    def is_open(self) -> bool:
        return is_open_security(self.security)

    @property
    def security_label(self) -> str:
        """Security for display: ``Open`` for unsecured networks."""
        return "Open" if self.is_open else self.security

    @classmethod
    def from_record(cls, record: ScanRecord) -> "NetworkEntry":
        return cls(ssid=record.ssid, signal=record.signal, security=record.security)


@dataclass(frozen=True)
class ConnectionRequest:
    """What to connect to. Consumed immediately, never stored."""

    ssid: str
    password: str | None = None

    def __repr__(self) -> str:
        masked = None if self.password is None else "********"
        return f"ConnectionRequest(ssid={self.ssid!r}, password={masked!r})"


class ConnectionOutcome(Enum):
    """Result of a connect operation that did not fail."""

    ALREADY_CONNECTED = "already_connected"
    CONNECTED = "connected"


def rank_networks(
    records: list[ScanRecord], limit: int = DEFAULT_MAX_NETWORKS
) -> list[NetworkEntry]:
    """Build the short-list from raw scan rows.

    Hidden networks are dropped, rows are ordered by descending signal,
    and only the strongest row per SSID is kept.

    Args:
        records: Scan rows in any order
        limit: Maximum number of entries

    Returns:
        At most ``limit`` entries with unique SSIDs
    """
    visible = [r for r in records if r.ssid]
    ordered = sorted(visible, key=lambda r: r.signal, reverse=True)

    entries: list[NetworkEntry] = []
    seen: set[str] = set()
    for record in ordered:
        if record.ssid in seen:
            continue
        seen.add(record.ssid)
        entries.append(NetworkEntry.from_record(record))
        if len(entries) >= limit:
            break

    return entries


class NetworkSelector:
    """Scan, short-list, and connect.

    Usage:
        selector = NetworkSelector(NmcliBackend(), TerminalInput())
        networks = selector.scan_networks()
        selector.connect_by_index(networks, "2")
    """

    def __init__(
        self,
        backend: WifiBackend,
        input_provider: InputProvider,
        console: Console | None = None,
        max_networks: int = DEFAULT_MAX_NETWORKS,
    ) -> None:
        """Initialize the selector.

        Args:
            backend: Network manager access
            input_provider: Source of password answers
            console: Where progress messages go
            max_networks: Short-list size
        """
        self._backend = backend
        self._input = input_provider
        self._console = console or Console()
        self._max_networks = max_networks

    def scan_networks(self) -> list[NetworkEntry]:
        """Scan and return the ranked short-list.

        Raises:
            ScanError: If no visible network remains after filtering
            BackendError: If the scan itself failed
        """
        self._console.info("Scanning for WiFi networks...")
        self._console.write()

        entries = rank_networks(self._backend.scan(), self._max_networks)
        if not entries:
            raise ScanError("No WiFi networks found.")

        logger.debug("Short-list: %s", [e.ssid for e in entries])
        return entries

    def show_networks(self, networks: list[NetworkEntry]) -> None:
        """Print the numbered short-list."""
        self._console.info("Available Networks:")
        self._console.write("-----------------")
        for index, entry in enumerate(networks, start=1):
            self._console.write(
                f"{index}. {self._console.green(entry.ssid)} "
                f"(Signal: {entry.signal}%, Security: {entry.security_label})"
            )
        self._console.write()

    def connect_by_index(
        self, networks: list[NetworkEntry], choice: int | str
    ) -> ConnectionOutcome:
        """Connect to the ``choice``-th entry (1-based) of a short-list.

        Args:
            networks: List returned by scan_networks
            choice: Number or the raw text the user typed

        Raises:
            InvalidSelectionError: If choice is not a listed position
            ConnectError: If the connection could not be established
        """
        entry = self.resolve_choice(networks, choice)
        return self._connect(ConnectionRequest(entry.ssid), entry.is_open, from_name=False)

    def resolve_choice(self, networks: list[NetworkEntry], choice: int | str) -> NetworkEntry:
        """Map a 1-based choice onto a short-list entry.

        Raises:
            InvalidSelectionError: If choice is not a listed position
        """
        return networks[self._parse_choice(choice, len(networks)) - 1]

    def connect_by_name(self, ssid: str, password: str | None = None) -> ConnectionOutcome:
        """Connect to a visible network by SSID.

        Args:
            ssid: Exact network name
            password: Credential, prompted for when needed and missing

        Raises:
            NetworkNotFoundError: If the SSID is not currently visible
            ConnectError: If the connection could not be established
        """
        records = [r for r in self._backend.scan() if r.ssid]
        matches = [r for r in records if r.ssid == ssid]
        if not matches:
            visible = sorted({r.ssid for r in records})
            raise NetworkNotFoundError(ssid, visible)

        strongest = max(matches, key=lambda r: r.signal)
        return self._connect(
            ConnectionRequest(ssid, password), strongest.is_open, from_name=True
        )

    @staticmethod
    def _parse_choice(choice: int | str, count: int) -> int:
        if isinstance(choice, str):
            text = choice.strip()
            # str.isdigit() also accepts digits int() rejects, such as "²"
            if not (text.isascii() and text.isdigit()):
                raise InvalidSelectionError(
                    f"Invalid choice. Please enter a number between 1 and {count}.",
                    details={"choice": choice},
                )
            choice = int(text)

        if not 1 <= choice <= count:
            raise InvalidSelectionError(
                f"Invalid choice. Please enter a number between 1 and {count}.",
                details={"choice": choice},
            )
        return choice

    def _connect(
        self, request: ConnectionRequest, is_open: bool, from_name: bool
    ) -> ConnectionOutcome:
        ssid = request.ssid
        logger.debug("Connecting with %r (open=%s)", request, is_open)

        if ssid in self._backend.list_profiles(active=True):
            logger.info("%s is already active", ssid)
            return ConnectionOutcome.ALREADY_CONNECTED

        if ssid in self._backend.list_profiles():
            self._console.info(f"Connecting to saved network: {ssid}")
            try:
                self._backend.connect_profile(ssid)
            except BackendError as e:
                raise SavedProfileError(
                    ssid,
                    f"Failed to connect to {ssid}. The saved connection might have issues.",
                    reason=e.reason,
                ) from e
            return ConnectionOutcome.CONNECTED

        if is_open:
            self._console.info(f"Connecting to open network: {ssid}")
            self._connect_new(ssid, None)
            return ConnectionOutcome.CONNECTED

        password = request.password
        if password is None:
            if from_name:
                self._console.info(f"Network '{ssid}' requires a password.")
            password = self._input.ask_secret(f"Enter password for {ssid}: ")

        self._console.info(f"Connecting to {ssid}...")
        self._connect_new(ssid, password)
        return ConnectionOutcome.CONNECTED

    def _connect_new(self, ssid: str, password: str | None) -> None:
        try:
            self._backend.connect_new(ssid, password)
        except BackendError as e:
            if password is not None:
                message = f"Failed to connect to {ssid}. Please check your password and try again."
            else:
                message = f"Failed to connect to {ssid}"
            raise ConnectError(ssid, message, reason=e.reason) from e
