import uuid
from dataclasses import dataclass

import pytest

from smarthome.adapters.memory_repositories import (
    InMemoryDeviceRepository,
    InMemoryMaintenanceLogRepository,
    InMemoryRoomRepository,
    InMemoryUserRepository,
)
from smarthome.domain.command_session import CommandSession
from smarthome.domain.device_service import DeviceService
from smarthome.domain.devices import DeviceKind, LightBulb, TemperatureSensor
from smarthome.domain.maintenance_service import MaintenanceLogService
from smarthome.domain.room_service import RoomService
from smarthome.domain.rooms import Room
from smarthome.domain.user_service import UserService
from smarthome.domain.users import User


TEST_PASSWORD_ITERATIONS = 1000

ALICE_EMAIL = "alice@example.com"
ALICE_PASSWORD = "secret123"
BOB_EMAIL = "bob@x.com"
BOB_PASSWORD = "pw"


class FakeNotifier:
    def __init__(self) -> None:
        self.notifications = 0

    def notify_device_changed(self) -> None:
        self.notifications += 1


class RecordingDeviceService:
    """Wraps a DeviceService and counts lookups, optionally failing them."""

    def __init__(self, inner: DeviceService, fail_with: Exception | None = None) -> None:
        self._inner = inner
        self._fail_with = fail_with
        self.lookups = 0

    def get_all_devices_for_user(self, owner_id):
        self.lookups += 1
        if self._fail_with:
            raise self._fail_with
        return self._inner.get_all_devices_for_user(owner_id)

    def get_device_by_id_for_user(self, device_id, owner_id):
        self.lookups += 1
        if self._fail_with:
            raise self._fail_with
        return self._inner.get_device_by_id_for_user(device_id, owner_id)

    def turn_on(self, device_id, owner_id):
        return self._inner.turn_on(device_id, owner_id)

    def turn_off(self, device_id, owner_id):
        return self._inner.turn_off(device_id, owner_id)


@dataclass
class Household:
    user: User
    kitchen: Room
    bulb: LightBulb
    sensor: TemperatureSensor


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def device_repository():
    return InMemoryDeviceRepository()


@pytest.fixture
def user_service(device_repository):
    return UserService(InMemoryUserRepository(), device_repository, TEST_PASSWORD_ITERATIONS)


@pytest.fixture
def device_service(device_repository, notifier):
    return DeviceService(device_repository, notifier)


@pytest.fixture
def room_service():
    return RoomService(InMemoryRoomRepository())


@pytest.fixture
def maintenance_service():
    return MaintenanceLogService(InMemoryMaintenanceLogRepository())


def build_household(user_service, room_service, device_service, username, email, password) -> Household:
    user = user_service.register(username, email, password)
    kitchen = room_service.add_room(user.id, "Kitchen")
    bulb = device_service.add_device("Kitchen Lamp", kitchen.id, DeviceKind.LIGHT_BULB, user.id)
    sensor = device_service.add_device("Kitchen Sensor", kitchen.id, DeviceKind.TEMPERATURE_SENSOR, user.id)
    return Household(user=user, kitchen=kitchen, bulb=bulb, sensor=sensor)


@pytest.fixture
def alice(user_service, room_service, device_service):
    return build_household(user_service, room_service, device_service, "alice", ALICE_EMAIL, ALICE_PASSWORD)


@pytest.fixture
def bob(user_service, room_service, device_service):
    return build_household(user_service, room_service, device_service, "bob", BOB_EMAIL, BOB_PASSWORD)


@pytest.fixture
def command_session(user_service, device_service, room_service):
    return CommandSession(users=user_service, devices=device_service, rooms=room_service)


def random_id() -> uuid.UUID:
    return uuid.uuid4()
