import logging
from dataclasses import dataclass

from smarthome.adapters.broadcast_notifier import QueueBroadcastNotifier
from smarthome.adapters.memory_repositories import (
    InMemoryDeviceRepository,
    InMemoryMaintenanceLogRepository,
    InMemoryRoomRepository,
    InMemoryUserRepository,
)
from smarthome.adapters.tcp_command import TcpCommandServer
from smarthome.config import SmartHomeConfig
from smarthome.domain.command_session import CommandSession
from smarthome.domain.device_service import DeviceService
from smarthome.domain.devices import DeviceKind
from smarthome.domain.maintenance_service import MaintenanceLogService
from smarthome.domain.passwords import DEFAULT_ITERATIONS
from smarthome.domain.room_service import RoomService
from smarthome.domain.user_service import UserService
from smarthome.domain.users import User

logger = logging.getLogger(__name__)


@dataclass
class SmartHomeServices:
    users: UserService
    devices: DeviceService
    rooms: RoomService
    maintenance: MaintenanceLogService
    notifier: QueueBroadcastNotifier


def create_services(password_iterations: int = DEFAULT_ITERATIONS) -> SmartHomeServices:
    device_repository = InMemoryDeviceRepository()
    notifier = QueueBroadcastNotifier()

    return SmartHomeServices(
        users=UserService(InMemoryUserRepository(), device_repository, password_iterations),
        devices=DeviceService(device_repository, notifier),
        rooms=RoomService(InMemoryRoomRepository()),
        maintenance=MaintenanceLogService(InMemoryMaintenanceLogRepository()),
        notifier=notifier,
    )


def seed_demo_data(services: SmartHomeServices, config: SmartHomeConfig) -> User:
    user = services.users.register(
        username=config.demo_username,
        email=config.demo_email,
        password=config.demo_password(),
    )
    kitchen = services.rooms.add_room(user.id, "Kitchen")
    bedroom = services.rooms.add_room(user.id, "Bedroom")

    lamp = services.devices.add_device("Kitchen Main", kitchen.id, DeviceKind.LIGHT_BULB, user.id)
    services.devices.add_device("Bedroom Lamp", bedroom.id, DeviceKind.LIGHT_BULB, user.id)
    services.devices.add_device("Kitchen Sensor", kitchen.id, DeviceKind.TEMPERATURE_SENSOR, user.id)
    services.maintenance.add_log(lamp.id, "Installed", "Bulb fitted in the kitchen ceiling.")

    logger.info("Seeded demo household for %s", config.demo_email)
    return user


def create_session_factory(services: SmartHomeServices):
    def create_session() -> CommandSession:
        return CommandSession(
            users=services.users,
            devices=services.devices,
            rooms=services.rooms,
        )

    return create_session


def create_server(config: SmartHomeConfig) -> tuple[TcpCommandServer, SmartHomeServices]:
    services = create_services()
    if config.seed_demo_data:
        seed_demo_data(services, config)

    server = TcpCommandServer(
        session_factory=create_session_factory(services),
        host=config.tcp_host,
        port=config.tcp_port,
        max_sessions=config.max_sessions,
        stream_limit=config.stream_limit,
    )
    return server, services
