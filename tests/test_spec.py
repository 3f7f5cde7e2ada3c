from __future__ import annotations

import json

from crucible.spec import ConsoleSize, LinuxNamespace, Mount, Process, Root, User
from crucible.specbuilder import build


def test_to_dict_uses_oci_field_names(cfg, user_finder, job_name):
    doc = build(job_name, cfg, user_finder).to_dict()

    assert list(doc) == ["ociVersion", "platform", "process", "root", "hostname", "mounts", "linux"]
    assert doc["hostname"] == "ambien-job"
    assert doc["root"] == {"path": "/var/vcap/data/crucible/bundles/ambien-job/rootfs"}

    process = doc["process"]
    assert process["terminal"] is False
    assert "consoleSize" not in process
    assert process["user"] == {"uid": 2000, "gid": 3000, "username": "vcap"}
    assert process["args"] == ["/var/vcap/packages/ambien/bin/ambien", "foo", "bar"]
    assert process["cwd"] == "/"
    assert process["rlimits"] == [{"type": "RLIMIT_NOFILE", "hard": 1024, "soft": 1024}]
    assert process["noNewPrivileges"] is True

    linux = doc["linux"]
    assert linux["rootfsPropagation"] == "private"
    assert {ns["type"] for ns in linux["namespaces"]} == {"uts", "mount"}
    assert "/proc/kcore" in linux["maskedPaths"]
    assert "/proc/sysrq-trigger" in linux["readonlyPaths"]


def test_mount_without_options_omits_the_key():
    assert Mount("/proc", "proc", "proc").to_dict() == {
        "destination": "/proc",
        "type": "proc",
        "source": "proc",
    }
    assert Mount("/bin", "bind", "/bin", ("rbind", "ro")).to_dict()["options"] == ["rbind", "ro"]


def test_optional_fields_are_only_emitted_when_set():
    assert User(uid=0, gid=0).to_dict() == {"uid": 0, "gid": 0}
    assert LinuxNamespace("net", path="/proc/1/ns/net").to_dict() == {
        "type": "net",
        "path": "/proc/1/ns/net",
    }
    assert Root(path="/r", readonly=True).to_dict() == {"path": "/r", "readonly": True}

    process = Process(user=User(1, 1), args=["sh"], console_size=ConsoleSize(24, 80))
    assert process.to_dict()["consoleSize"] == {"height": 24, "width": 80}
    assert "rlimits" not in process.to_dict()


def test_to_json_is_valid_and_stable(cfg, user_finder, job_name):
    rendered = build(job_name, cfg, user_finder).to_json()

    assert rendered.endswith("\n")
    assert json.loads(rendered)["ociVersion"] == "1.0.0"
    assert rendered == build(job_name, cfg, user_finder).to_json()
