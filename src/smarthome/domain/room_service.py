import uuid

from smarthome.domain.errors import RoomNotFoundError
from smarthome.domain.rooms import Room
from smarthome.ports.repositories import RoomRepository


class RoomService:
    def __init__(self, repository: RoomRepository) -> None:
        self._repository = repository

    def add_room(self, owner_id: uuid.UUID, name: str) -> Room:
        room = Room(name="", owner_id=owner_id)
        room.rename(name)
        self._repository.add(room)
        return room

    def get_user_rooms(self, owner_id: uuid.UUID) -> list[Room]:
        return self._repository.get_all_for_owner(owner_id)

    def rename_room(self, room_id: uuid.UUID, owner_id: uuid.UUID, new_name: str) -> Room:
        room = self._get_owned(room_id, owner_id)
        room.rename(new_name)
        self._repository.update(room)
        return room

    def delete_room(self, room_id: uuid.UUID, owner_id: uuid.UUID) -> None:
        self._get_owned(room_id, owner_id)
        self._repository.delete(room_id)

    def _get_owned(self, room_id: uuid.UUID, owner_id: uuid.UUID) -> Room:
        room = self._repository.get(room_id)
        if room is None or room.owner_id != owner_id:
            raise RoomNotFoundError("Room not found.")
        return room
