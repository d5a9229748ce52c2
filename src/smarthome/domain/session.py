import uuid
from dataclasses import dataclass
from enum import Enum, auto


class SessionState(Enum):
    GUEST = auto()
    AUTHENTICATED = auto()
    TERMINATED = auto()


VALID_TRANSITIONS: dict[SessionState, set[SessionState]] = {
    SessionState.GUEST: {SessionState.AUTHENTICATED, SessionState.TERMINATED},
    SessionState.AUTHENTICATED: {SessionState.TERMINATED},
    SessionState.TERMINATED: set(),
}


class InvalidTransitionError(Exception):
    pass


def validate_transition(current: SessionState, target: SessionState) -> None:
    if target not in VALID_TRANSITIONS.get(current, set()):
        raise InvalidTransitionError(f"Cannot transition from {current.name} to {target.name}")


@dataclass
class Session:
    state: SessionState = SessionState.GUEST
    user_id: uuid.UUID | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.state is SessionState.AUTHENTICATED

    def authenticate(self, user_id: uuid.UUID) -> None:
        validate_transition(self.state, SessionState.AUTHENTICATED)
        self.state = SessionState.AUTHENTICATED
        self.user_id = user_id

    def terminate(self) -> None:
        if self.state is SessionState.TERMINATED:
            return
        validate_transition(self.state, SessionState.TERMINATED)
        self.state = SessionState.TERMINATED
