"""Data models for y2manager."""

from __future__ import annotations

from .base import FileModel
from .config import Client, Configuration, HttpsConfig, MqttConfig, User
from .device import (
    ON_OFF_CAPABILITY,
    CapabilityEvent,
    CapabilityParameters,
    CapabilityRange,
    CapabilityState,
    Device,
    DeviceCapability,
    DeviceProperty,
    DeviceUpdate,
    MqttInstance,
    NewDevice,
    ValueMapping,
)
from .results import PathCheck, ToggleResult

__all__ = [
    "ON_OFF_CAPABILITY",
    "CapabilityEvent",
    "CapabilityParameters",
    "CapabilityRange",
    "CapabilityState",
    "Client",
    "Configuration",
    "Device",
    "DeviceCapability",
    "DeviceProperty",
    "DeviceUpdate",
    "FileModel",
    "HttpsConfig",
    "MqttConfig",
    "MqttInstance",
    "NewDevice",
    "PathCheck",
    "ToggleResult",
    "User",
    "ValueMapping",
]
