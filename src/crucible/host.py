# host.py
# Host facts for the spec's "platform" block, in the naming the OCI
# runtime-spec uses (GOOS / GOARCH values).
from __future__ import annotations

import platform as _platform
import sys
from typing import Dict

from .spec import Platform


_OS_NAMES: Dict[str, str] = {
    "linux": "linux",
    "darwin": "darwin",
    "win32": "windows",
    "cygwin": "windows",
    "freebsd": "freebsd",
    "openbsd": "openbsd",
    "netbsd": "netbsd",
    "sunos": "solaris",
    "aix": "aix",
}

_ARCH_NAMES: Dict[str, str] = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "i386": "386",
    "i486": "386",
    "i586": "386",
    "i686": "386",
    "x86": "386",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv6l": "arm",
    "armv7l": "arm",
    "armv8l": "arm",
    "ppc64le": "ppc64le",
    "ppc64": "ppc64",
    "s390x": "s390x",
    "riscv64": "riscv64",
    "mips64": "mips64",
}


def host_os(sys_platform: str | None = None) -> str:
    """Map sys.platform (e.g. "linux", "freebsd13") to an OCI os name."""
    name = (sys_platform or sys.platform).lower()
    if name in _OS_NAMES:
        return _OS_NAMES[name]
    # sys.platform carries a version suffix on the BSDs
    for prefix, oci_name in _OS_NAMES.items():
        if name.startswith(prefix):
            return oci_name
    return name


def host_arch(machine: str | None = None) -> str:
    """Map platform.machine() (e.g. "x86_64") to an OCI arch name."""
    name = (machine if machine is not None else _platform.machine()).lower()
    return _ARCH_NAMES.get(name, name)


def host_platform() -> Platform:
    return Platform(os=host_os(), arch=host_arch())
