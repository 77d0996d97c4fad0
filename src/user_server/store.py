from dataclasses import dataclass, asdict
from threading import Lock
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class User:
    id: str
    username: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

    @classmethod
    def from_payload(cls, data: Any) -> "User":
        """Build a user from a decoded JSON body.

        Raises ValueError unless ``data`` is an object whose ``id`` and
        ``username`` are both strings.
        """
        if not isinstance(data, dict):
            raise ValueError("user must be a JSON object")
        uid = data.get("id")
        username = data.get("username")
        if not isinstance(uid, str) or not isinstance(username, str):
            raise ValueError("id and username must be strings")
        return cls(id=uid, username=username)


class UserStore:
    """In-memory users keyed by caller-supplied id.

    Every method takes the lock for exactly one map operation. Records are
    immutable, so anything handed out stays consistent after the lock is
    released.
    """

    def __init__(self):
        self._lock = Lock()
        self._users: Dict[str, User] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)

    def insert(self, uid: str, user: User) -> None:
        with self._lock:
            self._users[uid] = user

    def get(self, uid: str) -> Optional[User]:
        with self._lock:
            return self._users.get(uid)

    def list(self) -> List[User]:
        with self._lock:
            return list(self._users.values())

    def replace(self, uid: str, user: User) -> bool:
        # check and write under one acquisition so a missing id is never created
        with self._lock:
            if uid not in self._users:
                return False
            self._users[uid] = user
            return True

    def remove(self, uid: str) -> bool:
        with self._lock:
            return self._users.pop(uid, None) is not None
