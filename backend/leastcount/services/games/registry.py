import threading
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from config import Config

from leastcount.errors import GameInProgress, PlayerNotFound, RoomNotFound
from leastcount.models import Player, Room, Status, generate_code
from .scheduler import reseat_after_departure


class RoomRegistry:
    """In-memory map of room code -> Room with one lock per room.

    ``_lock`` guards the map and membership index only. Anything that reads
    or mutates a room goes through ``locked()``, so events for the same room
    run one at a time while different rooms proceed independently.
    """

    def __init__(self, code_length: int = Config.ROOM_CODE_LENGTH):
        self.code_length = code_length
        self._lock = threading.Lock()
        self._rooms: Dict[str, Room] = {}
        self._room_locks: Dict[str, threading.RLock] = {}
        self._membership: Dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._rooms)

    def __contains__(self, room_id: str) -> bool:
        return room_id in self._rooms

    def room_of(self, player_id: str) -> Optional[str]:
        return self._membership.get(player_id)

    def create(self, host_id: str, username: str, round_limit: int) -> Room:
        with self._lock:
            code = generate_code(self.code_length, self._rooms)
            room = Room(room_id=code, host_id=host_id, round_limit=max(1, int(round_limit)))
            room.players.append(Player(id=host_id, username=username))
            self._rooms[code] = room
            self._room_locks[code] = threading.RLock()
            self._membership[host_id] = code
        return room

    def delete(self, room_id: str) -> None:
        with self._lock:
            room = self._rooms.pop(room_id, None)
            self._room_locks.pop(room_id, None)
            if room:
                for player in room.players:
                    if self._membership.get(player.id) == room_id:
                        del self._membership[player.id]

    @contextmanager
    def locked(self, room_id: str) -> Iterator[Room]:
        """Hold the room's lock for the duration of the block."""
        with self._lock:
            lock = self._room_locks.get(room_id)
            room = self._rooms.get(room_id)
        if lock is None or room is None:
            raise RoomNotFound()
        with lock:
            # The room may have been deleted while we waited for its lock.
            if self._rooms.get(room_id) is not room:
                raise RoomNotFound()
            yield room

    def check_joinable(self, room_id: str) -> Room:
        """Raise unless ``room_id`` exists and is still taking players."""
        with self.locked(room_id) as room:
            if room.status != Status.LOBBY:
                raise GameInProgress()
            return room

    def join(self, room_id: str, player_id: str, username: str) -> Room:
        with self.locked(room_id) as room:
            self.check_joinable(room_id)
            if room.find_player(player_id) is None:
                room.players.append(Player(id=player_id, username=username))
            with self._lock:
                self._membership[player_id] = room_id
            return room

    def leave(self, room_id: str, player_id: str) -> Room:
        """Remove a player, promoting a new host and deleting the room when empty.

        Returns the room; an empty ``players`` list means it was deleted.
        """
        with self.locked(room_id) as room:
            index = room.player_index(player_id)
            if index is None:
                raise PlayerNotFound()
            departed = room.players.pop(index)
            with self._lock:
                if self._membership.get(player_id) == room_id:
                    del self._membership[player_id]
            if not room.players:
                self.delete(room_id)
                return room
            if room.host_id == departed.id:
                room.host_id = room.players[0].id
            reseat_after_departure(room, index)
            return room
