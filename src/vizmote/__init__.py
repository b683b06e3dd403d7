"""vizmote -- Remote control for SmartCast displays.

Pairs with a display on the local network, keeps the issued auth token,
and exposes one command set to a terminal UI and a browser UI. Both
front ends share the same session and pairing state machine.
"""

__version__ = "0.1.0"
