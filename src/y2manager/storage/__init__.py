from __future__ import annotations

from .store import DEVICE_ID_PREFIX, DeviceStore, generate_device_id

__all__ = ["DEVICE_ID_PREFIX", "DeviceStore", "generate_device_id"]
