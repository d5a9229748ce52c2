import copy
import logging
import uuid

from smarthome.domain.devices import Device
from smarthome.domain.maintenance import MaintenanceLog
from smarthome.domain.rooms import Room
from smarthome.domain.users import User

logger = logging.getLogger(__name__)


class InMemoryDeviceRepository:
    def __init__(self) -> None:
        self._devices: dict[uuid.UUID, Device] = {}

    def add(self, device: Device) -> None:
        self._devices[device.id] = copy.copy(device)

    def get(self, device_id: uuid.UUID, owner_id: uuid.UUID) -> Device | None:
        device = self._devices.get(device_id)
        if device is None or device.owner_id != owner_id:
            return None
        return copy.copy(device)

    def get_all(self, owner_id: uuid.UUID) -> list[Device]:
        return [copy.copy(d) for d in self._devices.values() if d.owner_id == owner_id]

    def update(self, device: Device) -> None:
        if device.id not in self._devices:
            logger.warning("Update for unknown device %s ignored", device.id)
            return
        self._devices[device.id] = copy.copy(device)

    def delete(self, device_id: uuid.UUID) -> None:
        self._devices.pop(device_id, None)

    def delete_all_for_owner(self, owner_id: uuid.UUID) -> None:
        owned = [device_id for device_id, d in self._devices.items() if d.owner_id == owner_id]
        for device_id in owned:
            del self._devices[device_id]


class InMemoryRoomRepository:
    def __init__(self) -> None:
        self._rooms: dict[uuid.UUID, Room] = {}

    def add(self, room: Room) -> None:
        self._rooms[room.id] = copy.copy(room)

    def get(self, room_id: uuid.UUID) -> Room | None:
        room = self._rooms.get(room_id)
        return copy.copy(room) if room else None

    def get_all_for_owner(self, owner_id: uuid.UUID) -> list[Room]:
        return [copy.copy(r) for r in self._rooms.values() if r.owner_id == owner_id]

    def update(self, room: Room) -> None:
        if room.id in self._rooms:
            self._rooms[room.id] = copy.copy(room)

    def delete(self, room_id: uuid.UUID) -> None:
        self._rooms.pop(room_id, None)


class InMemoryUserRepository:
    def __init__(self) -> None:
        self._users: dict[uuid.UUID, User] = {}

    def add(self, user: User) -> None:
        self._users[user.id] = copy.copy(user)

    def get(self, user_id: uuid.UUID) -> User | None:
        user = self._users.get(user_id)
        return copy.copy(user) if user else None

    def get_by_email(self, email: str) -> User | None:
        wanted = email.strip().lower()
        for user in self._users.values():
            if user.email.lower() == wanted:
                return copy.copy(user)
        return None

    def search(self, phrase: str) -> list[User]:
        needle = phrase.strip().lower()
        return [
            copy.copy(u)
            for u in self._users.values()
            if needle in u.username.lower() or needle in u.email.lower()
        ]

    def update(self, user: User) -> None:
        if user.id in self._users:
            self._users[user.id] = copy.copy(user)

    def delete(self, user_id: uuid.UUID) -> None:
        self._users.pop(user_id, None)


class InMemoryMaintenanceLogRepository:
    def __init__(self) -> None:
        self._logs: dict[uuid.UUID, MaintenanceLog] = {}

    def add(self, log: MaintenanceLog) -> None:
        self._logs[log.id] = copy.copy(log)

    def get(self, log_id: uuid.UUID) -> MaintenanceLog | None:
        log = self._logs.get(log_id)
        return copy.copy(log) if log else None

    def get_for_device(self, device_id: uuid.UUID) -> list[MaintenanceLog]:
        logs = [copy.copy(log) for log in self._logs.values() if log.device_id == device_id]
        return sorted(logs, key=lambda log: log.created_at, reverse=True)

    def update(self, log: MaintenanceLog) -> None:
        if log.id in self._logs:
            self._logs[log.id] = copy.copy(log)

    def delete(self, log_id: uuid.UUID) -> None:
        self._logs.pop(log_id, None)
