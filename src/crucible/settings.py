from __future__ import annotations
import os

from .specbuilder import JOBS_ROOT as DEFAULT_JOBS_ROOT

_FALSE_VALUES = ("", "0", "false", "no", "off", "n", "f")


def env_flag(value: str | None) -> bool:
    """Read an on/off environment value; unset or a false-ish word means off."""
    return (value or "").strip().lower() not in _FALSE_VALUES


# where `crucible` looks for <job>/config/crucible.yml
JOBS_ROOT = os.environ.get("CRUCIBLE_JOBS_ROOT", DEFAULT_JOBS_ROOT)
DEBUG = env_flag(os.environ.get("CRUCIBLE_DEBUG"))
