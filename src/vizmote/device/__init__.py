"""Remote display capability for vizmote.

Public API:
    DeviceClient -- Abstract base class
    DeviceFactory -- Callable building a client for an address
    SmartCastClient -- SmartCast REST backend
"""

from vizmote.device.base import DeviceClient, DeviceFactory

__all__ = ["DeviceClient", "DeviceFactory", "SmartCastClient"]


def __getattr__(name: str) -> type:
    """Lazy import for the concrete client that requires httpx."""
    if name == "SmartCastClient":
        from vizmote.device.smartcast import SmartCastClient
        return SmartCastClient
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
