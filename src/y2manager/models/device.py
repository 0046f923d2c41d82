"""Device models."""

from __future__ import annotations

from pydantic import Field

from .base import FileModel

ON_OFF_CAPABILITY = "devices.capabilities.on_off"

StateValue = bool | int | float | str


class MqttInstance(FileModel):
    """MQTT topic pair for one aspect of a device."""

    instance: str
    set: str | None = None
    state: str | None = None


class ValueMapping(FileModel):
    type: str
    mapping: list[list[StateValue]]


class CapabilityRange(FileModel):
    min: int | float | None = None
    max: int | float | None = None
    precision: int | float | None = None


class CapabilityEvent(FileModel):
    value: str


class CapabilityParameters(FileModel):
    instance: str | None = None
    unit: str | None = None
    range: CapabilityRange | None = None
    events: list[CapabilityEvent] | None = None
    random_access: bool | None = None


class CapabilityState(FileModel):
    instance: str
    value: StateValue


class DeviceCapability(FileModel):
    type: str
    retrievable: bool | None = None
    reportable: bool | None = None
    parameters: CapabilityParameters | None = None
    state: CapabilityState | None = None


class DeviceProperty(FileModel):
    type: str
    retrievable: bool | None = None
    reportable: bool | None = None
    parameters: CapabilityParameters | None = None


class Device(FileModel):
    """Device entry in the bridge config."""

    id: str
    name: str
    room: str
    type: str
    mqtt: list[MqttInstance]
    value_mapping: list[ValueMapping] | None = Field(default=None, alias="valueMapping")
    capabilities: list[DeviceCapability] | None = None
    properties: list[DeviceProperty] | None = None

    def find_capability(self, capability_type: str) -> DeviceCapability | None:
        for capability in self.capabilities or []:
            if capability.type == capability_type:
                return capability
        return None


class NewDevice(FileModel):
    """Device payload before an id is assigned."""

    name: str
    room: str
    type: str
    mqtt: list[MqttInstance]
    value_mapping: list[ValueMapping] | None = Field(default=None, alias="valueMapping")
    capabilities: list[DeviceCapability] | None = None
    properties: list[DeviceProperty] | None = None


class DeviceUpdate(FileModel):
    """Partial device; only fields that were given are applied."""

    id: str | None = None
    name: str | None = None
    room: str | None = None
    type: str | None = None
    mqtt: list[MqttInstance] | None = None
    value_mapping: list[ValueMapping] | None = Field(default=None, alias="valueMapping")
    capabilities: list[DeviceCapability] | None = None
    properties: list[DeviceProperty] | None = None
