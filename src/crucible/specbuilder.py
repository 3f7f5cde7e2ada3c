# specbuilder.py
# Turns a job's crucible config into the runc spec that sandboxes it.
from __future__ import annotations

from typing import List, Tuple

from .config import CrucibleConfig
from .errors import ConfigError, IdentityError
from .host import host_platform
from .identity import UserIDFinder
from .paths import join_under
from .spec import Linux, LinuxNamespace, LinuxRlimit, Mount, Process, Root, Spec


OCI_VERSION = "1.0.0"

# every job runs as this user, never root
VCAP_USER = "vcap"

BUNDLES_ROOT = "/var/vcap/data/crucible/bundles"
ROOTFS_DIR = "rootfs"
JOBS_ROOT = "/var/vcap/jobs"
DATA_PACKAGES_DIR = "/var/vcap/data/packages"
PACKAGES_DIR = "/var/vcap/packages"

MAX_OPEN_FILES = 1024


# ---------------------------------------------------------------------
# Isolation policy
# ---------------------------------------------------------------------
# Tuples of frozen dataclasses: build() copies them into fresh lists, so
# whatever a caller does to one spec never shows up in the next.

_SYSTEM_BIND_OPTIONS = ("nosuid", "nodev", "rbind", "ro")
_JOB_BIND_OPTIONS = ("rbind", "ro")

DEFAULT_MOUNTS: Tuple[Mount, ...] = (
    Mount(destination="/proc", type="proc", source="proc"),
    Mount(
        destination="/dev",
        type="tmpfs",
        source="tmpfs",
        options=("nosuid", "noexec", "mode=755", "size=65536k"),
    ),
    Mount(
        destination="/dev/pts",
        type="devpts",
        source="devpts",
        options=("nosuid", "noexec", "newinstance", "ptmxmode=0666", "mode=0620", "gid=5"),
    ),
    Mount(
        destination="/dev/shm",
        type="tmpfs",
        source="shm",
        options=("nosuid", "noexec", "nodev", "mode=1777", "size=65536k"),
    ),
    Mount(
        destination="/dev/mqueue",
        type="mqueue",
        source="mqueue",
        options=("nosuid", "noexec", "nodev"),
    ),
    Mount(
        destination="/sys",
        type="sysfs",
        source="sysfs",
        options=("nosuid", "noexec", "nodev", "ro"),
    ),
    Mount(
        destination="/sys/fs/cgroup",
        type="cgroup",
        source="cgroup",
        options=("nosuid", "noexec", "nodev", "relatime", "ro"),
    ),
) + tuple(
    # host directories the job's executable needs to run at all
    Mount(destination=d, type="bind", source=d, options=_SYSTEM_BIND_OPTIONS)
    for d in ("/bin", "/etc", "/usr", "/lib", "/lib64")
)

MASKED_PATHS: Tuple[str, ...] = (
    "/proc/kcore",
    "/proc/latency_stats",
    "/proc/timer_list",
    "/proc/timer_stats",
    "/proc/sched_debug",
    "/sys/firmware",
)

READONLY_PATHS: Tuple[str, ...] = (
    "/proc/asound",
    "/proc/bus",
    "/proc/fs",
    "/proc/irq",
    "/proc/sys",
    "/proc/sysrq-trigger",
)

# pid, network, ipc and user namespaces are shared with the host
NAMESPACES: Tuple[LinuxNamespace, ...] = (
    LinuxNamespace(type="uts"),
    LinuxNamespace(type="mount"),
)


# ---------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------

def rootfs_path(job_name: str) -> str:
    return join_under(BUNDLES_ROOT, job_name, ROOTFS_DIR)


def job_mounts(job_name: str) -> List[Mount]:
    """Read-only binds of the job's own directory and the shared packages."""
    job_dir = join_under(JOBS_ROOT, job_name)
    return [
        Mount(destination=job_dir, type="bind", source=job_dir, options=_JOB_BIND_OPTIONS),
        Mount(
            destination=DATA_PACKAGES_DIR,
            type="bind",
            source=DATA_PACKAGES_DIR,
            options=_JOB_BIND_OPTIONS,
        ),
        Mount(destination=PACKAGES_DIR, type="bind", source=PACKAGES_DIR, options=_JOB_BIND_OPTIONS),
    ]


# ---------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------

def build(job_name: str, cfg: CrucibleConfig, user_finder: UserIDFinder) -> Spec:
    """
    Build the runc spec for one job.

    Args:
        job_name: Name of the owning job; used for the hostname, the bundle
            path and the job directory mount.
        cfg: The job's crucible config. Must define a process.
        user_finder: Resolves the vcap user. Called exactly once.

    Returns:
        A new Spec. Nothing in it is shared with other calls.

    Raises:
        ConfigError: "no process defined" if cfg has no process.
        IdentityError: if the user lookup fails, wrapping the original error.
    """
    proc = cfg.process
    if proc is None:
        raise ConfigError("no process defined")

    try:
        user = user_finder.lookup(VCAP_USER)
    except Exception as e:
        raise IdentityError(cause=e) from e

    process = Process(
        terminal=False,
        console_size=None,
        user=user,
        args=[proc.executable, *proc.args],
        env=list(proc.env),
        cwd="/",
        rlimits=[LinuxRlimit(type="RLIMIT_NOFILE", hard=MAX_OPEN_FILES, soft=MAX_OPEN_FILES)],
        no_new_privileges=True,
    )

    return Spec(
        version=OCI_VERSION,
        platform=host_platform(),
        process=process,
        root=Root(path=rootfs_path(job_name)),
        hostname=job_name,
        mounts=list(DEFAULT_MOUNTS) + job_mounts(job_name),
        linux=Linux(
            namespaces=list(NAMESPACES),
            masked_paths=list(MASKED_PATHS),
            readonly_paths=list(READONLY_PATHS),
            rootfs_propagation="private",
        ),
    )
