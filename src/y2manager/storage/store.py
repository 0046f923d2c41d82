"""Device store backed by the bridge config module."""

from __future__ import annotations

import logging
import threading
import uuid
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from y2manager.errors import (
    CapabilityNotSupportedError,
    ConfigParseError,
    ConfigSchemaError,
    ConfigWriteError,
    DeviceNotFoundError,
)
from y2manager.jsconfig import (
    MODULE_EXPORTS_MARKER,
    parse_config_text,
    render_config_text,
)
from y2manager.models import (
    ON_OFF_CAPABILITY,
    CapabilityState,
    Configuration,
    Device,
    DeviceUpdate,
    NewDevice,
    ToggleResult,
)

logger = logging.getLogger(__name__)

DEVICE_ID_PREFIX = "id_device_"


def generate_device_id() -> str:
    return f"{DEVICE_ID_PREFIX}{uuid.uuid4().hex[:8]}"


def default_document() -> dict[str, Any]:
    """Data of a fresh config file: default bridge sections and no devices."""
    return Configuration().model_dump(by_alias=True)


def _valid_devices(records: Any) -> dict[str, Device]:
    devices: dict[str, Device] = {}
    for record in records if isinstance(records, list) else []:
        try:
            device = Device.model_validate(record)
        except ValidationError:
            continue
        devices[device.id] = device
    return devices


class DeviceStore:
    """In-memory devices plus the configuration document they belong to.

    Every mutation rewrites the whole file at ``path``. Sections other than
    ``devices`` are written back exactly as they were read. A file that does
    not match the models is readable but never rewritten until the store is
    reloaded or given a whole new configuration.

    Mutations are serialized by a lock, so writes from threads sharing one
    store never interleave; separate processes still race and the last write
    wins.

    Usage:
        store = DeviceStore.open(Path("/opt/yandex2mqtt/config.js"))
        device = store.create_device(NewDevice(...))
        store.toggle_device(device.id)
    """

    def __init__(self, path: Path, fallback_path: Path | None = None) -> None:
        self._path = path
        self._fallback_path = fallback_path
        self._document: dict[str, Any] = default_document()
        self._configuration = Configuration()
        self._devices: dict[str, Device] = {}
        self._schema_error: ConfigSchemaError | None = None
        self._lock = threading.RLock()

    @classmethod
    def open(cls, path: Path, fallback_path: Path | None = None) -> DeviceStore:
        store = cls(path, fallback_path)
        store.load()
        return store

    @property
    def path(self) -> Path:
        return self._path

    @property
    def fallback_path(self) -> Path | None:
        return self._fallback_path

    @property
    def writable(self) -> bool:
        return self._schema_error is None

    @property
    def configuration(self) -> Configuration:
        """Current configuration with ``devices`` taken from the store.

        Raises ConfigSchemaError when the loaded file does not match the models.
        """
        with self._lock:
            if self._schema_error is not None:
                raise self._schema_error
            return self._configuration.model_copy(
                update={"devices": list(self._devices.values())}
            )

    # Lifecycle
    def load(self) -> None:
        """Load the config file, falling back to defaults on any read problem."""
        with self._lock:
            loaded = self._read()
            if loaded is None:
                self._use(Configuration(), default_document())
            else:
                self._validate(*loaded)

    def reload(self, path: Path) -> None:
        """Point the store at another file and load it."""
        with self._lock:
            logger.info("Switching devices file from %s to %s", self._path, path)
            self._path = path
            self.load()

    def _read(self) -> tuple[dict[str, Any], Path] | None:
        candidates = [self._path]
        if self._fallback_path is not None:
            candidates.append(self._fallback_path)

        for candidate in candidates:
            try:
                text = candidate.read_text(encoding="utf-8")
            except OSError as exc:
                logger.warning("Cannot read %s: %s", candidate, exc)
                continue
            data = self._parse(text, candidate)
            return None if data is None else (data, candidate)

        logger.warning("No readable configuration, starting with an empty one")
        return None

    @staticmethod
    def _parse(text: str, source: Path) -> dict[str, Any] | None:
        try:
            data = parse_config_text(text)
        except ConfigParseError as exc:
            logger.warning("Cannot parse %s: %s", source, exc)
            return None

        if data is None:
            logger.warning("No '%s' found in %s", MODULE_EXPORTS_MARKER, source)
            return None
        return data

    def _validate(self, data: dict[str, Any], source: Path) -> None:
        try:
            configuration = Configuration.model_validate(data)
        except ValidationError as exc:
            logger.warning(
                "Configuration in %s does not match the schema, "
                "it will not be rewritten:\n%s",
                source,
                exc,
            )
            self._document = data
            self._devices = _valid_devices(data.get("devices"))
            self._schema_error = ConfigSchemaError(source)
            return

        self._use(configuration, data)
        logger.info("Loaded %d device(s) from %s", len(self._devices), source)

    def _use(self, configuration: Configuration, document: dict[str, Any]) -> None:
        self._configuration = configuration
        self._document = document
        self._devices = {device.id: device for device in configuration.devices}
        self._schema_error = None

    def _check_writable(self) -> None:
        if self._schema_error is not None:
            raise self._schema_error

    def data(self) -> dict[str, Any]:
        """Plain data of the config module as it is written to disk."""
        with self._lock:
            if self._schema_error is not None:
                return self._document
            devices = [device.to_data() for device in self._devices.values()]
            return {**self._document, "devices": devices}

    def render(self) -> str:
        """Text of the config module as it is written to disk."""
        return render_config_text(self.data())

    def _persist(self) -> None:
        with self._lock:
            text = self.render()
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                self._path.write_text(text, encoding="utf-8")
            except OSError as exc:
                raise ConfigWriteError(self._path, exc) from exc
            logger.info("Wrote %d device(s) to %s", len(self._devices), self._path)

    # Devices
    def list_devices(self) -> list[Device]:
        with self._lock:
            return list(self._devices.values())

    def get_device(self, device_id: str) -> Device | None:
        with self._lock:
            return self._devices.get(device_id)

    def create_device(self, new_device: NewDevice) -> Device:
        """Add a device under a freshly generated id and save."""
        with self._lock:
            self._check_writable()
            device_id = generate_device_id()
            while device_id in self._devices:
                device_id = generate_device_id()

            device = Device.model_validate({**new_device.to_data(), "id": device_id})
            self._devices[device_id] = device
            self._persist()

        logger.debug("Created device %s (%s)", device_id, device.name)
        return device

    def update_device(self, device_id: str, updates: DeviceUpdate) -> Device | None:
        """Merge the given fields onto a device and save. Returns None if absent.

        Fields left unset or set to None are not changed; the id never changes.
        """
        changes = updates.model_dump(
            by_alias=True, exclude_unset=True, exclude_none=True
        )
        changes.pop("id", None)

        with self._lock:
            self._check_writable()
            device = self._devices.get(device_id)
            if device is None:
                return None

            merged = {**device.to_data(), **changes, "id": device_id}
            updated = Device.model_validate(merged)
            self._devices[device_id] = updated
            self._persist()

        logger.debug(
            "Updated device %s: %s", device_id, ", ".join(changes) or "no changes"
        )
        return updated

    def delete_device(self, device_id: str) -> bool:
        """Remove a device and save. Returns True if it existed."""
        with self._lock:
            self._check_writable()
            if self._devices.pop(device_id, None) is None:
                return False
            self._persist()

        logger.debug("Deleted device %s", device_id)
        return True

    def list_rooms(self) -> list[str]:
        with self._lock:
            return sorted({device.room for device in self._devices.values()})

    def toggle_device(self, device_id: str) -> ToggleResult:
        """Flip the on/off state of a device and save."""
        with self._lock:
            self._check_writable()
            device = self._devices.get(device_id)
            if device is None:
                raise DeviceNotFoundError(device_id)

            capability = device.find_capability(ON_OFF_CAPABILITY)
            if capability is None:
                raise CapabilityNotSupportedError(device_id, ON_OFF_CAPABILITY)

            state = capability.state
            previous_state = state is not None and state.value is True
            new_state = not previous_state
            instance = (state.instance if state is not None else "") or "on"

            switched = CapabilityState(instance=instance, value=new_state)
            capabilities = [
                item.model_copy(update={"state": switched})
                if item.type == ON_OFF_CAPABILITY
                else item
                for item in device.capabilities or []
            ]
            updated = device.model_copy(update={"capabilities": capabilities})
            self._devices[device_id] = updated
            self._persist()

        logger.debug(
            "Toggled device %s: %s -> %s", device_id, previous_state, new_state
        )
        return ToggleResult(
            previous_state=previous_state, new_state=new_state, device=updated
        )

    # Configuration
    def save_configuration(self, configuration: Configuration) -> None:
        """Replace the whole configuration, devices included, and save.

        Also makes a store loaded from a mismatching file writable again.
        """
        with self._lock:
            self._use(configuration, configuration.to_data())
            self._persist()
