from .config import CrucibleConfig, ProcessConfig, load
from .errors import ConfigError, CrucibleError, IdentityError
from .identity import PasswdUserIDFinder, UserIDFinder
from .spec import Spec, User
from .specbuilder import build

__all__ = [
    "build",
    "load",
    "CrucibleConfig",
    "ProcessConfig",
    "Spec",
    "User",
    "UserIDFinder",
    "PasswdUserIDFinder",
    "CrucibleError",
    "ConfigError",
    "IdentityError",
]
