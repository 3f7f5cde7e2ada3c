from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import pytest

from crucible.config import CrucibleConfig, ProcessConfig
from crucible.spec import User


@dataclass
class FakeUserIDFinder:
    """Records lookups and returns a canned user (or raises a canned error)."""
    user: User = field(default_factory=lambda: User(uid=2000, gid=3000, username="vcap"))
    error: Optional[Exception] = None
    calls: List[str] = field(default_factory=list)

    def lookup(self, username: str) -> User:
        self.calls.append(username)
        if self.error is not None:
            raise self.error
        return self.user


@pytest.fixture
def user_finder() -> FakeUserIDFinder:
    return FakeUserIDFinder()


@pytest.fixture
def cfg() -> CrucibleConfig:
    return CrucibleConfig(
        process=ProcessConfig(
            executable="/var/vcap/packages/ambien/bin/ambien",
            args=["foo", "bar"],
            env=["RAVE=true", "ONE=two"],
        )
    )


@pytest.fixture
def job_name() -> str:
    return "ambien-job"
