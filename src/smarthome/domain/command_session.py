import logging
import uuid
from dataclasses import dataclass

from smarthome.domain.commands import Command, CommandVerb, parse_command
from smarthome.domain.device_service import DeviceService
from smarthome.domain.devices import Device, LightBulb, render_status
from smarthome.domain.room_service import RoomService
from smarthome.domain.session import Session, SessionState
from smarthome.domain.user_service import UserService

logger = logging.getLogger(__name__)

WELCOME_LINES = (
    "Welcome to SmartHome Raw TCP Interface!",
    "Please LOGIN first.",
    "Commands: LOGIN <email> <pass>, LIST, TOGGLE <GUID>, EXIT",
)

GUEST_PROMPT = "> [Guest] "
USER_PROMPT = "> [User] "

ACCESS_DENIED = "Access Denied. Please LOGIN first."
NO_ROOM = "No room"


@dataclass(frozen=True)
class CommandResult:
    response: str | None
    terminate: bool = False


class CommandSession:
    def __init__(
        self,
        users: UserService,
        devices: DeviceService,
        rooms: RoomService,
    ) -> None:
        self._users = users
        self._devices = devices
        self._rooms = rooms
        self._session = Session()

    @property
    def state(self) -> SessionState:
        return self._session.state

    @property
    def user_id(self) -> uuid.UUID | None:
        return self._session.user_id

    @property
    def prompt(self) -> str:
        return USER_PROMPT if self._session.is_authenticated else GUEST_PROMPT

    def welcome_lines(self) -> tuple[str, ...]:
        return WELCOME_LINES

    def handle_line(self, line: str) -> CommandResult:
        if self._session.state is SessionState.TERMINATED:
            return CommandResult(response=None, terminate=True)

        if not line.strip():
            self._session.terminate()
            return CommandResult(response=None, terminate=True)

        command = parse_command(line)
        logger.debug("Command %s with %d args", command.raw_verb, len(command.args))

        try:
            response = self._dispatch(command)
        except Exception as exc:
            logger.exception("Command %s failed", command.raw_verb)
            response = f"Error: {exc}"

        if command.verb is CommandVerb.EXIT:
            self._session.terminate()
            return CommandResult(response=response, terminate=True)
        return CommandResult(response=response)

    def terminate(self) -> None:
        self._session.terminate()

    def _dispatch(self, command: Command) -> str:
        if command.verb is CommandVerb.LOGIN:
            return self._login(command.args)
        if command.verb is CommandVerb.LIST:
            return self._list()
        if command.verb is CommandVerb.TOGGLE:
            return self._toggle(command.args)
        if command.verb is CommandVerb.EXIT:
            return "Goodbye."
        return "Unknown command."

    def _login(self, args: tuple[str, ...]) -> str:
        if len(args) < 2:
            return "Usage: LOGIN <email> <password>"
        if self._session.is_authenticated:
            return "Already logged in."

        email, password = args[0], args[1]
        user = self._users.authenticate(email, password)
        if user is None:
            logger.info("Failed login attempt for %s", email)
            return "Invalid credentials."

        self._session.authenticate(user.id)
        logger.info("User %s logged in", user.username)
        return f"Welcome {user.username}! You are now logged in."

    def _list(self) -> str:
        user_id = self._session.user_id
        if not self._session.is_authenticated or user_id is None:
            return ACCESS_DENIED

        devices = self._devices.get_all_devices_for_user(user_id)
        if not devices:
            return "No devices found."

        room_names = {room.id: room.name for room in self._rooms.get_user_rooms(user_id)}
        lines = [f"--- Devices for User {user_id} ---"]
        lines.extend(_render_device_line(device, room_names) for device in devices)
        return "\n".join(lines)

    def _toggle(self, args: tuple[str, ...]) -> str:
        user_id = self._session.user_id
        if not self._session.is_authenticated or user_id is None:
            return ACCESS_DENIED
        if not args:
            return "Error: Provide ID"

        try:
            device_id = uuid.UUID(args[0])
        except ValueError:
            return "Error: Invalid GUID"

        device = self._devices.get_device_by_id_for_user(device_id, user_id)
        if device is None:
            return "Device not found."
        if not isinstance(device, LightBulb):
            return "Device is not a lightbulb."

        # Read-then-write: a concurrent toggle of the same bulb can interleave here
        if device.is_on:
            switched = self._devices.turn_off(device_id, user_id)
        else:
            switched = self._devices.turn_on(device_id, user_id)

        if not switched:
            return "Device not found."
        logger.info("Device %s toggled by %s", device_id, user_id)
        return "Device state toggled."


def _render_device_line(device: Device, room_names: dict[uuid.UUID, str]) -> str:
    room_name = room_names.get(device.room_id, NO_ROOM)
    return f"{device.id} | {device.name} ({room_name}) {render_status(device)}"
