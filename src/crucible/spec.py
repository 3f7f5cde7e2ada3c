# spec.py
# Python model of the subset of the OCI runtime-spec that crucible emits.
# Field names follow Python conventions; to_dict() produces the JSON shape
# runc reads from a bundle's config.json.
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class User:
    """The uid/gid the container process runs as."""
    uid: int
    gid: int
    username: str = ""

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"uid": self.uid, "gid": self.gid}
        if self.username:
            out["username"] = self.username
        return out


@dataclass(frozen=True)
class ConsoleSize:
    height: int
    width: int

    def to_dict(self) -> Dict[str, Any]:
        return {"height": self.height, "width": self.width}


@dataclass(frozen=True)
class LinuxRlimit:
    type: str   # e.g. "RLIMIT_NOFILE"
    hard: int
    soft: int

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "hard": self.hard, "soft": self.soft}


@dataclass(frozen=True)
class Mount:
    """
    A single entry of the container's mount table.

    options is a tuple so that module level mount tables stay immutable;
    None means "no options" and is omitted from the JSON.
    """
    destination: str
    type: str
    source: str
    options: Optional[Tuple[str, ...]] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "destination": self.destination,
            "type": self.type,
            "source": self.source,
        }
        if self.options is not None:
            out["options"] = list(self.options)
        return out


@dataclass(frozen=True)
class LinuxNamespace:
    type: str           # "uts", "mount", "pid", ...
    path: str = ""      # join an existing namespace instead of creating one

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": self.type}
        if self.path:
            out["path"] = self.path
        return out


@dataclass
class Process:
    user: User
    args: List[str]
    env: List[str] = field(default_factory=list)
    cwd: str = "/"
    terminal: bool = False
    console_size: Optional[ConsoleSize] = None
    rlimits: List[LinuxRlimit] = field(default_factory=list)
    no_new_privileges: bool = False

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"terminal": self.terminal}
        if self.console_size is not None:
            out["consoleSize"] = self.console_size.to_dict()
        out["user"] = self.user.to_dict()
        out["args"] = list(self.args)
        out["env"] = list(self.env)
        out["cwd"] = self.cwd
        if self.rlimits:
            out["rlimits"] = [r.to_dict() for r in self.rlimits]
        out["noNewPrivileges"] = self.no_new_privileges
        return out


@dataclass(frozen=True)
class Root:
    path: str
    readonly: bool = False

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"path": self.path}
        if self.readonly:
            out["readonly"] = True
        return out


@dataclass(frozen=True)
class Platform:
    os: str
    arch: str

    def to_dict(self) -> Dict[str, Any]:
        return {"os": self.os, "arch": self.arch}


@dataclass
class Linux:
    namespaces: List[LinuxNamespace] = field(default_factory=list)
    masked_paths: List[str] = field(default_factory=list)
    readonly_paths: List[str] = field(default_factory=list)
    rootfs_propagation: str = ""

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "namespaces": [ns.to_dict() for ns in self.namespaces],
        }
        if self.masked_paths:
            out["maskedPaths"] = list(self.masked_paths)
        if self.readonly_paths:
            out["readonlyPaths"] = list(self.readonly_paths)
        if self.rootfs_propagation:
            out["rootfsPropagation"] = self.rootfs_propagation
        return out


@dataclass
class Spec:
    """A complete runc spec for one job. Built fresh on every call."""
    version: str
    platform: Platform
    process: Process
    root: Root
    hostname: str
    mounts: List[Mount] = field(default_factory=list)
    linux: Linux = field(default_factory=Linux)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ociVersion": self.version,
            "platform": self.platform.to_dict(),
            "process": self.process.to_dict(),
            "root": self.root.to_dict(),
            "hostname": self.hostname,
            "mounts": [m.to_dict() for m in self.mounts],
            "linux": self.linux.to_dict(),
        }

    def to_json(self) -> str:
        # key order is fixed by to_dict(); indent keeps config.json diffable
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False) + "\n"
