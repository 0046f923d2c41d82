from __future__ import annotations


class Y2ManagerError(Exception):
    """Base class for y2manager errors."""


class ConfigParseError(Y2ManagerError, ValueError):
    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ):
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)


class DeviceNotFoundError(Y2ManagerError, LookupError):
    def __init__(self, device_id: str):
        self.device_id = device_id
        super().__init__(f"Device '{device_id}' not found")


class CapabilityNotSupportedError(Y2ManagerError, ValueError):
    def __init__(self, device_id: str, capability: str):
        self.device_id = device_id
        self.capability = capability
        super().__init__(f"Device '{device_id}' has no '{capability}' capability")


class ConfigWriteError(Y2ManagerError, OSError):
    def __init__(self, path: object, reason: OSError):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write configuration to {path}: {reason}")


class ConfigSchemaError(Y2ManagerError, ValueError):
    """The loaded config file does not match the models, so it is not rewritten."""

    def __init__(self, path: object):
        self.path = path
        super().__init__(
            f"Configuration in {path} does not match the expected schema; "
            "fix the file or import a configuration before making changes"
        )
