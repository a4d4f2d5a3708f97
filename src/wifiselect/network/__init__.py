"""Network backend module.

Provides:
- WifiBackend interface and ScanRecord rows
- NmcliBackend for NetworkManager control
- MockWifiBackend for development and tests
"""

from .backend import ScanRecord, WifiBackend
from .nmcli import NmcliBackend
from .mock import MockWifiBackend, demo_backend

__all__ = [
    "ScanRecord",
    "WifiBackend",
    "NmcliBackend",
    "MockWifiBackend",
    "demo_backend",
]
