"""Pick a nearby WiFi network and connect to it.

A small command line front-end for NetworkManager featuring:
- Ranked short-list of the strongest visible networks
- Reuse of active and saved connection profiles
- Password prompt for secured networks
"""

__version__ = "1.3.0"
