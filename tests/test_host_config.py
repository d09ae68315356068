from __future__ import annotations

import pytest

from tfutil.core.errors import ConfigError
from tfutil.host.config import load_config, parse_config


def test_load_config_from_yaml(tmp_path):
    path = tmp_path / "tfutil.yaml"
    path.write_text(
        "provider:\n"
        "  bypass_indestructible: true\n"
        "resources:\n"
        "  guard:\n"
        "    type: util_indestructible\n"
        "    allow_destroy: false\n"
        "    protected_value:\n"
        "      vpc: vpc-123\n"
    )
    cfg = load_config(path)
    assert cfg.provider == {"bypass_indestructible": True}
    block = cfg.desired()["util_indestructible.guard"]
    assert block.attributes == {"allow_destroy": False, "protected_value": {"vpc": "vpc-123"}}


def test_empty_config_is_valid():
    cfg = parse_config(None)
    assert cfg.provider is None
    assert cfg.desired() == {}


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "nope.yaml")


def test_invalid_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("resources: [unclosed")
    with pytest.raises(ConfigError):
        load_config(path)


@pytest.mark.parametrize(
    "data",
    [
        ["resources"],
        {"resource": {}},
        {"resources": ["guard"]},
        {"resources": {"guard": "util_indestructible"}},
        {"resources": {"guard": {"allow_destroy": True}}},
    ],
)
def test_malformed_config_raises(data):
    with pytest.raises(ConfigError):
        parse_config(data)
