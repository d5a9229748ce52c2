import logging
import uuid

from smarthome.domain.devices import Device, DeviceKind, LightBulb, TemperatureSensor, create_device
from smarthome.ports.notifier import DeviceNotifier
from smarthome.ports.repositories import DeviceRepository

logger = logging.getLogger(__name__)


class DeviceService:
    def __init__(self, repository: DeviceRepository, notifier: DeviceNotifier) -> None:
        self._repository = repository
        self._notifier = notifier

    def get_all_devices_for_user(self, owner_id: uuid.UUID) -> list[Device]:
        return self._repository.get_all(owner_id)

    def get_device_by_id_for_user(self, device_id: uuid.UUID, owner_id: uuid.UUID) -> Device | None:
        return self._repository.get(device_id, owner_id)

    def add_device(
        self,
        name: str,
        room_id: uuid.UUID,
        kind: DeviceKind | str,
        owner_id: uuid.UUID,
    ) -> Device:
        if isinstance(kind, str):
            kind = DeviceKind.parse(kind)
        device = create_device(name, room_id, kind, owner_id)
        self._repository.add(device)
        logger.info("Added %s %s for user %s", kind.value, device.id, owner_id)
        self._notifier.notify_device_changed()
        return device

    def turn_on(self, device_id: uuid.UUID, owner_id: uuid.UUID) -> bool:
        return self._switch(device_id, owner_id, on=True)

    def turn_off(self, device_id: uuid.UUID, owner_id: uuid.UUID) -> bool:
        return self._switch(device_id, owner_id, on=False)

    def get_temperature(self, device_id: uuid.UUID, owner_id: uuid.UUID) -> float | None:
        device = self._repository.get(device_id, owner_id)
        if isinstance(device, TemperatureSensor):
            return device.get_reading()
        return None

    def set_temperature(self, device_id: uuid.UUID, owner_id: uuid.UUID, value: float) -> bool:
        device = self._repository.get(device_id, owner_id)
        if not isinstance(device, TemperatureSensor):
            return False
        device.set_temperature(value)
        self._repository.update(device)
        self._notifier.notify_device_changed()
        return True

    def rename_device(self, device_id: uuid.UUID, owner_id: uuid.UUID, new_name: str) -> bool:
        device = self._repository.get(device_id, owner_id)
        if device is None or not new_name or not new_name.strip():
            return False
        device.name = new_name.strip()
        self._repository.update(device)
        self._notifier.notify_device_changed()
        return True

    def delete_device(self, device_id: uuid.UUID, owner_id: uuid.UUID) -> bool:
        device = self._repository.get(device_id, owner_id)
        if device is None:
            return False
        self._repository.delete(device_id)
        logger.info("Deleted device %s for user %s", device_id, owner_id)
        self._notifier.notify_device_changed()
        return True

    def _switch(self, device_id: uuid.UUID, owner_id: uuid.UUID, on: bool) -> bool:
        device = self._repository.get(device_id, owner_id)
        if not isinstance(device, LightBulb):
            return False
        if on:
            device.turn_on()
        else:
            device.turn_off()
        self._repository.update(device)
        logger.debug("Device %s switched %s", device_id, "on" if on else "off")
        self._notifier.notify_device_changed()
        return True
