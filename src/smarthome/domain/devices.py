import uuid
from dataclasses import dataclass, field
from enum import Enum

from smarthome.domain.errors import InvalidDeviceError


class DeviceKind(Enum):
    LIGHT_BULB = "LightBulb"
    TEMPERATURE_SENSOR = "TemperatureSensor"

    @classmethod
    def parse(cls, text: str) -> "DeviceKind":
        normalized = text.strip().lower()
        for kind in cls:
            if kind.value.lower() == normalized:
                return kind
        raise InvalidDeviceError(f"Unknown device type: {text!r}")


@dataclass
class LightBulb:
    name: str
    room_id: uuid.UUID
    owner_id: uuid.UUID
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    is_on: bool = False

    @property
    def kind(self) -> DeviceKind:
        return DeviceKind.LIGHT_BULB

    def turn_on(self) -> None:
        self.is_on = True

    def turn_off(self) -> None:
        self.is_on = False


@dataclass
class TemperatureSensor:
    name: str
    room_id: uuid.UUID
    owner_id: uuid.UUID
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    current_temperature: float | None = 21.0

    @property
    def kind(self) -> DeviceKind:
        return DeviceKind.TEMPERATURE_SENSOR

    def get_reading(self) -> float | None:
        return self.current_temperature

    def set_temperature(self, value: float) -> None:
        self.current_temperature = value


Device = LightBulb | TemperatureSensor


def create_device(
    name: str,
    room_id: uuid.UUID,
    kind: DeviceKind,
    owner_id: uuid.UUID,
) -> Device:
    if not name or not name.strip():
        raise InvalidDeviceError("Device name cannot be empty.")
    if kind is DeviceKind.LIGHT_BULB:
        return LightBulb(name=name.strip(), room_id=room_id, owner_id=owner_id)
    if kind is DeviceKind.TEMPERATURE_SENSOR:
        return TemperatureSensor(name=name.strip(), room_id=room_id, owner_id=owner_id)
    raise InvalidDeviceError(f"Unsupported device type: {kind}")


def render_status(device: Device) -> str:
    if device.kind is DeviceKind.LIGHT_BULB:
        return "[ON] 💡" if device.is_on else "[OFF] 🌑"
    if device.kind is DeviceKind.TEMPERATURE_SENSOR:
        reading = device.get_reading()
        if reading is None:
            return "[TEMP: --°C] 🌡️"
        return f"[TEMP: {reading:.1f}°C] 🌡️"
    raise InvalidDeviceError(f"No status rendering for {device.kind}")
