from __future__ import annotations

from dataclasses import dataclass

from .device import Device


@dataclass
class ToggleResult:
    previous_state: bool
    new_state: bool
    device: Device


@dataclass
class PathCheck:
    valid: bool
    message: str
