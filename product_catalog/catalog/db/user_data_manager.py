from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from catalog.config import USERS_FILE
from catalog.db.storage import read_records, write_records
from catalog.exceptions import StorageError
from catalog.models.user import User

log = logging.getLogger(__name__)

KIND = "users"


class UserDataManager:
    """
    Checkpoints the whole user list to one file and restores it.
    Failures never raise: they come back as a result value and are kept in
    ``last_error``.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else Path(USERS_FILE)
        self._last_error: str = ""

    @property
    def last_error(self) -> str:
        return self._last_error

    def save_users(self, users: Iterable[User]) -> tuple[bool, str]:
        self._last_error = ""
        users = list(users)
        try:
            write_records(self.path, KIND, [u.to_dict() for u in users])
        except (StorageError, AttributeError, TypeError, ValueError) as e:
            self._last_error = str(e)
            log.warning("Failed to save users: %s", e)
            return False, self._last_error
        msg = f"Saved {len(users)} user(s) to {self.path}"
        log.info(msg)
        return True, msg

    def load_users(self) -> Optional[list[User]]:
        """
        None when the file is missing (seed defaults) or unreadable.
        Otherwise the saved users in saved order, possibly empty.
        """
        self._last_error = ""
        try:
            records = read_records(self.path, KIND)
            users = [User.from_dict(r) for r in records]
        except FileNotFoundError:
            log.info("Users file %s not found, default users will be created", self.path)
            return None
        except (StorageError, KeyError, TypeError, ValueError) as e:
            self._last_error = str(e)
            log.warning("Failed to load users from %s: %s", self.path, e)
            return None
        log.info("Loaded %d user(s) from %s", len(users), self.path)
        return users
