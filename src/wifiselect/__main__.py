"""wifi-select entry point.

Usage:
    wifi-select                        List networks and prompt to connect
    wifi-select -l                     Only list available networks
    wifi-select -n MyWifi              Connect to 'MyWifi', prompt for password
    wifi-select -n MyWifi -p mypass    Connect to 'MyWifi' with password 'mypass'
"""

import argparse
import sys
from typing import NoReturn, Sequence

from . import __version__
from .console import Console
from .core.config import load_config
from .core.errors import (
    ConfigurationError,
    ConnectError,
    MissingDependencyError,
    NetworkNotFoundError,
    WifiSelectError,
)
from .core.logging import setup_logging, get_logger
from .network import NmcliBackend, WifiBackend, demo_backend
from .prompt import InputProvider, TerminalInput
from .selector import ConnectionOutcome, NetworkSelector

logger = get_logger(__name__)

EXAMPLES = """\
Examples:
  %(prog)s                         List networks and prompt to connect
  %(prog)s -l                      Only list available networks
  %(prog)s -n MyWifi               Connect to 'MyWifi', prompt for password
  %(prog)s -n MyWifi -p mypass     Connect to 'MyWifi' with password 'mypass'
"""


class UsageErrorParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit status 1."""

    def error(self, message: str) -> NoReturn:
        Console().error(f"Error: {message}")
        self.print_help(sys.stderr)
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    """Create the command line parser."""
    parser = UsageErrorParser(
        prog="wifi-select",
        allow_abbrev=False,
        description="List available WiFi networks and connect to them.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-l",
        "--list",
        action="store_true",
        help="List available networks only, without connecting",
    )
    parser.add_argument(
        "-n",
        "--name",
        metavar="SSID",
        help="Connect to the network with the specified SSID",
    )
    parser.add_argument(
        "-p",
        "--password",
        metavar="PASSWORD",
        help="Use the specified password when connecting (with --name)",
    )
    parser.add_argument(
        "-c",
        "--config",
        metavar="PATH",
        help="Path to config file (default: ~/.config/wifi-select/config.yaml)",
    )
    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use built-in demo networks instead of NetworkManager",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def run_interactive(
    selector: NetworkSelector, console: Console, input_provider: InputProvider
) -> int:
    """Scan, list, and connect to the network the user picks."""
    networks = selector.scan_networks()
    selector.show_networks(networks)

    console.info(f"Select (1-{len(networks)}) to select a network, press Enter to quit:")
    choice = input_provider.ask("")

    if not choice.strip():
        console.success("Exiting.")
        return 0

    entry = selector.resolve_choice(networks, choice)
    outcome = selector.connect_by_index(networks, choice)
    report_outcome(console, outcome, entry.ssid)
    return 0


def log_failure(error: WifiSelectError) -> None:
    """Record a failure for diagnostics; the user sees it through the console."""
    logger.debug(
        "%s: %s",
        error.severity.value,
        error.message,
        extra={"error": error.to_dict()},
        exc_info=error,
    )


def report_outcome(console: Console, outcome: ConnectionOutcome, ssid: str) -> None:
    if outcome is ConnectionOutcome.ALREADY_CONNECTED:
        console.success(f"Already connected to {ssid}")
    else:
        console.success(f"Successfully connected to {ssid}")


def main(
    argv: Sequence[str] | None = None,
    backend: WifiBackend | None = None,
    input_provider: InputProvider | None = None,
) -> int:
    """Main entry point.

    Args:
        argv: Command line arguments (default: sys.argv[1:])
        backend: Backend to use instead of nmcli
        input_provider: Answer source instead of the terminal

    Returns:
        Process exit status
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.name is not None and not args.name:
        parser.error("argument -n/--name: expected one argument")
    if args.password is not None and not args.password:
        parser.error("argument -p/--password: expected one argument")

    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        Console().error(f"Error: {e}")
        return 1

    setup_logging(
        level="DEBUG" if args.debug else config.logging.level,
        log_format=config.logging.format,
        log_file=config.logging.file,
        max_size_mb=config.logging.max_size_mb,
        backup_count=config.logging.backup_count,
        use_colors=None if config.display.color and not args.no_color else False,
    )
    logger.debug("wifi-select v%s", __version__)

    console = Console(use_colors=config.display.color and not args.no_color)
    input_provider = input_provider or TerminalInput()

    if backend is None:
        if args.mock:
            backend = demo_backend()
        else:
            try:
                backend = NmcliBackend(
                    nmcli_path=config.backend.nmcli_path,
                    rescan=config.backend.rescan,
                    timeout=config.backend.timeout,
                )
            except MissingDependencyError as e:
                log_failure(e)
                console.error(f"Error: {e.message}")
                console.error("Please install NetworkManager and try again.")
                return 1

    selector = NetworkSelector(
        backend,
        input_provider,
        console=console,
        max_networks=config.display.max_networks,
    )

    try:
        if args.list:
            selector.show_networks(selector.scan_networks())
            return 0

        if args.name:
            outcome = selector.connect_by_name(args.name, args.password)
            report_outcome(console, outcome, args.name)
            return 0

        return run_interactive(selector, console, input_provider)

    except NetworkNotFoundError as e:
        log_failure(e)
        console.error(e.message)
        console.info("Available networks:")
        for ssid in e.visible:
            console.write(f"- {ssid}")
        return 1

    except ConnectError as e:
        log_failure(e)
        console.error(e.message)
        if e.reason:
            console.error(e.reason)
        return 1

    except WifiSelectError as e:
        log_failure(e)
        console.error(e.message)
        return 1

    except KeyboardInterrupt:
        console.write()
        return 130


if __name__ == "__main__":
    sys.exit(main())
