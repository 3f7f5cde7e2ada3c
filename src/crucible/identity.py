# identity.py
from __future__ import annotations

import pwd
from typing import Protocol

from .spec import User


class UserIDFinder(Protocol):
    """Resolves a user name to the uid/gid the container runs as."""

    def lookup(self, username: str) -> User:
        ...


class PasswdUserIDFinder:
    """
    UserIDFinder backed by the host's user database (getpwnam).

    An unknown user raises KeyError straight from the pwd module.
    """

    def lookup(self, username: str) -> User:
        entry = pwd.getpwnam(username)
        return User(uid=entry.pw_uid, gid=entry.pw_gid, username=entry.pw_name)
