import uuid
from typing import Protocol

from smarthome.domain.devices import Device
from smarthome.domain.maintenance import MaintenanceLog
from smarthome.domain.rooms import Room
from smarthome.domain.users import User


class DeviceRepository(Protocol):
    def add(self, device: Device) -> None: ...
    def get(self, device_id: uuid.UUID, owner_id: uuid.UUID) -> Device | None: ...
    def get_all(self, owner_id: uuid.UUID) -> list[Device]: ...
    def update(self, device: Device) -> None: ...
    def delete(self, device_id: uuid.UUID) -> None: ...
    def delete_all_for_owner(self, owner_id: uuid.UUID) -> None: ...


class RoomRepository(Protocol):
    def add(self, room: Room) -> None: ...
    def get(self, room_id: uuid.UUID) -> Room | None: ...
    def get_all_for_owner(self, owner_id: uuid.UUID) -> list[Room]: ...
    def update(self, room: Room) -> None: ...
    def delete(self, room_id: uuid.UUID) -> None: ...


class UserRepository(Protocol):
    def add(self, user: User) -> None: ...
    def get(self, user_id: uuid.UUID) -> User | None: ...
    def get_by_email(self, email: str) -> User | None: ...
    def search(self, phrase: str) -> list[User]: ...
    def update(self, user: User) -> None: ...
    def delete(self, user_id: uuid.UUID) -> None: ...


class MaintenanceLogRepository(Protocol):
    def add(self, log: MaintenanceLog) -> None: ...
    def get(self, log_id: uuid.UUID) -> MaintenanceLog | None: ...
    def get_for_device(self, device_id: uuid.UUID) -> list[MaintenanceLog]: ...
    def update(self, log: MaintenanceLog) -> None: ...
    def delete(self, log_id: uuid.UUID) -> None: ...
