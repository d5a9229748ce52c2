import uuid
from dataclasses import dataclass, field

from smarthome.domain.errors import InvalidRoomNameError


@dataclass
class Room:
    name: str
    owner_id: uuid.UUID
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def rename(self, new_name: str) -> None:
        if not new_name or not new_name.strip():
            raise InvalidRoomNameError("Room name cannot be empty.")
        self.name = new_name.strip()
