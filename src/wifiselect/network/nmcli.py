"""WiFi backend using NetworkManager/nmcli.

All operations run nmcli with list arguments (no shell), one blocking call
at a time. Output is read in terse mode (``-t``), where fields are separated
by ``:`` and literal colons or backslashes inside a field are escaped.
"""

import logging
import shutil
import subprocess

from ..core.errors import BackendError, MissingDependencyError
from .backend import ScanRecord, WifiBackend

logger = logging.getLogger(__name__)


def split_terse_line(line: str) -> list[str]:
    """Split one line of ``nmcli -t`` output into fields.

    Args:
        line: Raw output line, e.g. ``My\\:Net:72:WPA2``

    Returns:
        Unescaped fields, e.g. ``["My:Net", "72", "WPA2"]``
    """
    fields: list[str] = []
    current: list[str] = []
    chars = iter(line)

    for char in chars:
        if char == "\\":
            # Escaped separator or backslash; a trailing lone backslash is kept
            current.append(next(chars, "\\"))
        elif char == ":":
            fields.append("".join(current))
            current = []
        else:
            current.append(char)

    fields.append("".join(current))
    return fields


def parse_scan_output(output: str) -> list[ScanRecord]:
    """Parse ``nmcli -t -f SSID,SIGNAL,SECURITY device wifi list`` output.

    Args:
        output: Command stdout

    Returns:
        One record per well-formed line, in output order
    """
    records: list[ScanRecord] = []

    for line in output.splitlines():
        if not line.strip():
            continue

        parts = split_terse_line(line)
        if len(parts) < 3:
            logger.debug("Skipping malformed scan line: %r", line)
            continue

        # Last two fields are signal and security; an unescaped colon can
        # only have come from the SSID
        ssid = ":".join(parts[:-2])
        try:
            signal = int(parts[-2]) if parts[-2] else 0
        except ValueError:
            signal = 0

        records.append(ScanRecord(ssid=ssid, signal=signal, security=parts[-1].strip()))

    return records


def parse_name_output(output: str) -> list[str]:
    """Parse ``nmcli -t -f NAME connection show`` output into profile names."""
    names = []
    for line in output.splitlines():
        if not line:
            continue
        name = split_terse_line(line)[0]
        if name:
            names.append(name)
    return names


def _redact(args: tuple[str, ...]) -> list[str]:
    """Mask the value following a ``password`` keyword."""
    shown = list(args)
    for i, arg in enumerate(shown[:-1]):
        if arg == "password":
            shown[i + 1] = "********"
    return shown


class NmcliBackend(WifiBackend):
    """WifiBackend that drives NetworkManager through nmcli.

    Usage:
        backend = NmcliBackend()
        records = backend.scan()
        backend.connect_new("MyNetwork", "password123")
    """

    def __init__(
        self,
        nmcli_path: str = "nmcli",
        rescan: bool = False,
        timeout: float | None = None,
    ) -> None:
        """Initialize the nmcli backend.

        Args:
            nmcli_path: nmcli command name or absolute path
            rescan: Ask NetworkManager for a fresh scan before listing
            timeout: Seconds to wait for each nmcli call (None waits forever)

        Raises:
            MissingDependencyError: If nmcli cannot be found
        """
        resolved = shutil.which(nmcli_path)
        if resolved is None:
            raise MissingDependencyError("nmcli")

        self._nmcli = resolved
        self._rescan = rescan
        self._timeout = timeout

    def _run_nmcli(self, *args: str, check: bool = True) -> str:
        """Run nmcli and return its stdout.

        Args:
            *args: nmcli arguments
            check: Raise on non-zero exit

        Returns:
            Command stdout

        Raises:
            BackendError: If the command fails or times out
        """
        logger.debug("Running: nmcli %s", " ".join(_redact(args)))

        try:
            proc = subprocess.run(
                [self._nmcli, *args],
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise BackendError(
                "nmcli command timed out",
                reason=f"no response after {self._timeout}s",
                details={"args": _redact(args)},
            ) from e
        except OSError as e:
            raise BackendError(
                "nmcli could not be started", reason=str(e), details={"args": _redact(args)}
            ) from e

        if check and proc.returncode != 0:
            reason = (
                proc.stderr.strip()
                or proc.stdout.strip()
                or f"exit status {proc.returncode}"
            )
            logger.debug("nmcli exited with %d: %s", proc.returncode, reason)
            raise BackendError(
                f"nmcli failed: {reason}",
                reason=reason,
                details={"returncode": proc.returncode},
            )

        return proc.stdout

    def scan(self) -> list[ScanRecord]:
        if self._rescan:
            self._run_nmcli("device", "wifi", "rescan", check=False)

        output = self._run_nmcli("-t", "-f", "SSID,SIGNAL,SECURITY", "device", "wifi", "list")
        records = parse_scan_output(output)

        logger.info("nmcli reported %d scan rows", len(records))
        return records

    def list_profiles(self, active: bool = False) -> list[str]:
        args = ["-t", "-f", "NAME", "connection", "show"]
        if active:
            args.append("--active")
        return parse_name_output(self._run_nmcli(*args))

    def connect_profile(self, name: str) -> None:
        logger.info("Activating saved profile %s", name)
        self._run_nmcli("connection", "up", name)

    def connect_new(self, ssid: str, password: str | None = None) -> None:
        logger.info("Connecting to new network %s", ssid)
        if password is not None:
            self._run_nmcli("device", "wifi", "connect", ssid, "password", password)
        else:
            self._run_nmcli("device", "wifi", "connect", ssid)
