from __future__ import annotations

from pathlib import Path

import pytest

from crucible.config import CrucibleConfig, config_path, load
from crucible.errors import ConfigError


def _write(tmp_path: Path, text: str) -> Path:
    p = tmp_path / "crucible.yml"
    p.write_text(text, encoding="utf-8")
    return p


def test_config_path_follows_job_layout():
    assert config_path("ambien-job", "/var/vcap/jobs") == Path(
        "/var/vcap/jobs/ambien-job/config/crucible.yml"
    )


def test_load_full_process(tmp_path):
    p = _write(
        tmp_path,
        """
process:
  executable: /var/vcap/packages/ambien/bin/ambien
  args:
    - foo
    - bar
  env:
    - RAVE=true
    - ONE=two
""",
    )

    cfg = load(p)

    assert cfg.process is not None
    assert cfg.process.executable == "/var/vcap/packages/ambien/bin/ambien"
    assert cfg.process.args == ["foo", "bar"]
    assert cfg.process.env == ["RAVE=true", "ONE=two"]


def test_args_and_env_default_to_empty(tmp_path):
    cfg = load(_write(tmp_path, "process:\n  executable: /bin/true\n"))

    assert cfg.process.args == []
    assert cfg.process.env == []


def test_empty_file_has_no_process(tmp_path):
    assert load(_write(tmp_path, "")) == CrucibleConfig()


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="could not read config"):
        load(tmp_path / "nope.yml")


def test_invalid_yaml(tmp_path):
    with pytest.raises(ConfigError, match="invalid YAML"):
        load(_write(tmp_path, "process: [unclosed\n"))


def test_document_must_be_a_mapping(tmp_path):
    with pytest.raises(ConfigError, match="must be a mapping"):
        load(_write(tmp_path, "- just\n- a list\n"))


def test_schema_violations(tmp_path):
    with pytest.raises(ConfigError, match="invalid config"):
        load(_write(tmp_path, "process:\n  args: [foo]\n"))

    with pytest.raises(ConfigError, match="invalid config"):
        load(_write(tmp_path, "process:\n  executable: /bin/true\n  arg: [typo]\n"))


def test_config_path_keeps_odd_job_names_under_jobs_root():
    assert config_path("/etc", "/var/vcap/jobs") == Path("/var/vcap/jobs/etc/config/crucible.yml")
    assert config_path("a/../b", "/var/vcap/jobs") == Path("/var/vcap/jobs/b/config/crucible.yml")
