from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from tfutil.cli.app import app
from tfutil.core.guard.policy import BYPASS_ENV_VAR

runner = CliRunner()

LOCKED = """
resources:
  guard:
    type: util_indestructible
    allow_destroy: false
    error_message: Ask the platform team.
"""

UNLOCKED = """
resources:
  guard:
    type: util_indestructible
    allow_destroy: true
"""


@pytest.fixture()
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _invoke(*args):
    return runner.invoke(app, ["--env-file", "missing.env", *args])


def _write(path, text):
    path.write_text(text)
    return path


def _state(workdir):
    return json.loads((workdir / "tfutil.state.json").read_text())["resources"]


def test_version(workdir):
    result = _invoke("version")
    assert result.exit_code == 0
    assert "tfutil" in result.output


def test_schema_json_lists_attributes(workdir):
    result = _invoke("schema", "--json")
    assert result.exit_code == 0
    data = json.loads(result.output)
    attrs = data["resources"]["util_indestructible"]["attributes"]
    assert set(attrs) == {"allow_destroy", "allow_bypass", "error_message", "protected_value"}
    assert attrs["allow_bypass"]["default"] is True
    assert "bypass_indestructible" in data["provider"]["attributes"]


def test_apply_then_destroy_denied(workdir):
    _write(workdir / "tfutil.yaml", LOCKED)

    result = _invoke("apply")
    assert result.exit_code == 0, result.output
    assert "util_indestructible.guard" in _state(workdir)

    result = _invoke("destroy")
    assert result.exit_code == 1
    assert "Destruction Not Allowed" in result.output
    assert "util_indestructible.guard" in _state(workdir)


def test_unlock_then_destroy(workdir):
    config = _write(workdir / "tfutil.yaml", LOCKED)
    assert _invoke("apply").exit_code == 0

    _write(config, UNLOCKED)
    assert _invoke("apply").exit_code == 0
    result = _invoke("destroy")
    assert result.exit_code == 0, result.output
    assert _state(workdir) == {}


def test_env_file_enables_bypass(workdir, monkeypatch):
    _write(workdir / "tfutil.yaml", LOCKED)
    assert _invoke("apply").exit_code == 0

    _write(workdir / "bypass.env", f"{BYPASS_ENV_VAR}=true\n")
    monkeypatch.delenv(BYPASS_ENV_VAR, raising=False)
    result = runner.invoke(app, ["--env-file", "bypass.env", "destroy"])
    monkeypatch.delenv(BYPASS_ENV_VAR, raising=False)

    assert result.exit_code == 0, result.output
    assert "Bypassing Destroy Protection" in result.output
    assert _state(workdir) == {}


def test_plan_shows_forced_replacement(workdir):
    config = _write(
        workdir / "tfutil.yaml",
        "resources:\n  guard:\n    type: util_indestructible\n    protected_value: v1\n",
    )
    assert _invoke("apply").exit_code == 0

    _write(config, "resources:\n  guard:\n    type: util_indestructible\n    protected_value: v2\n")
    result = _invoke("plan")
    assert result.exit_code == 0, result.output
    assert "replace" in result.output


def test_show_and_refresh(workdir):
    _write(workdir / "tfutil.yaml", LOCKED)
    assert _invoke("show").exit_code == 0
    assert _invoke("apply").exit_code == 0

    result = _invoke("refresh")
    assert result.exit_code == 0, result.output
    result = _invoke("show")
    assert result.exit_code == 0
    assert "util_indestructible.guard" in result.output


def test_missing_config_fails(workdir):
    result = _invoke("apply", "--config", "absent.yaml")
    assert result.exit_code == 1


def test_invalid_provider_block_fails(workdir):
    _write(workdir / "tfutil.yaml", "provider:\n  bypass_indestructible: sometimes\n")
    result = _invoke("apply")
    assert result.exit_code == 1
    assert "Invalid Resource Data" in result.output
