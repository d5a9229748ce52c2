import logging
import uuid

from smarthome.domain.errors import EmailTakenError, UserNotFoundError
from smarthome.domain.passwords import DEFAULT_ITERATIONS, hash_password, verify_password
from smarthome.domain.users import User
from smarthome.ports.repositories import DeviceRepository, UserRepository

logger = logging.getLogger(__name__)


class UserService:
    def __init__(
        self,
        users: UserRepository,
        devices: DeviceRepository,
        password_iterations: int = DEFAULT_ITERATIONS,
    ) -> None:
        self._users = users
        self._devices = devices
        self._password_iterations = password_iterations

    def register(self, username: str, email: str, password: str, role: str = "User") -> User:
        if self._users.get_by_email(email) is not None:
            raise EmailTakenError("Email is already taken.")

        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password, self._password_iterations),
            role=role,
        )
        self._users.add(user)
        logger.info("Registered user %s (%s)", user.username, user.id)
        return user

    def authenticate(self, email: str, password: str) -> User | None:
        user = self._users.get_by_email(email)
        if user is None:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    def get_by_id(self, user_id: uuid.UUID) -> User | None:
        return self._users.get(user_id)

    def search_users(self, phrase: str) -> list[User]:
        return self._users.search(phrase)

    def update_user(self, user_id: uuid.UUID, new_username: str, new_password: str | None = None) -> User:
        user = self._users.get(user_id)
        if user is None:
            raise UserNotFoundError("User not found.")

        user.username = new_username
        if new_password:
            user.password_hash = hash_password(new_password, self._password_iterations)

        self._users.update(user)
        return user

    def delete_user(self, user_id: uuid.UUID) -> None:
        user = self._users.get(user_id)
        if user is None:
            raise UserNotFoundError("User not found.")

        self._devices.delete_all_for_owner(user_id)
        self._users.delete(user_id)
        logger.info("Deleted user %s and their devices", user_id)
