# errors.py
from __future__ import annotations

from dataclasses import dataclass


class CrucibleError(Exception):
    """Base class for everything crucible raises on purpose."""


class ConfigError(CrucibleError):
    """
    The job configuration cannot be turned into a spec.

    Raised with the exact message "no process defined" when the config has
    no process; callers match on that string, so it is never decorated.
    """


@dataclass
class IdentityError(CrucibleError):
    """
    Looking up the container user failed.

    The finder's exception is kept as-is in `cause` (and chained as
    __cause__) so callers can inspect the original error.
    """
    cause: BaseException

    def __post_init__(self) -> None:
        # keeps args populated so pickle/copy can rebuild the exception
        super().__init__(self.cause)

    def __str__(self) -> str:
        return str(self.cause)
