import json

import pytest

from rulekit.config import ConfigManager, DSLConfig, RulekitConfig, SystemConfig, load_config
from rulekit.exceptions import ConfigurationError

ENV_VARS = (
    "RULEKIT_ENVIRONMENT",
    "RULEKIT_LOG_LEVEL",
    "RULEKIT_DEFAULT_SYNTAX",
    "RULEKIT_FIELD_SEPARATOR",
    "RULEKIT_MAX_DEPTH",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = load_config()
    assert config.system.environment == "development"
    assert config.system.log_level == "INFO"
    assert config.dsl.default_syntax == "expression"
    assert config.dsl.field_separator == "."
    assert config.dsl.max_depth == 64


def test_load_from_file(tmp_path):
    path = tmp_path / "rulekit.json"
    path.write_text(json.dumps({
        "system": {"environment": "production", "log_level": "warning"},
        "dsl": {"default_syntax": "mongo", "field_separator": "/", "max_depth": 10},
    }))

    config = load_config(str(path))
    assert config.system.environment == "production"
    assert config.system.log_level == "WARNING"
    assert config.dsl.default_syntax == "mongo"
    assert config.dsl.field_separator == "/"
    assert config.dsl.max_depth == 10


def test_environment_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "rulekit.json"
    path.write_text(json.dumps({"dsl": {"default_syntax": "mongo"}}))
    monkeypatch.setenv("RULEKIT_DEFAULT_SYNTAX", "GraphQL")
    monkeypatch.setenv("RULEKIT_LOG_LEVEL", "debug")
    monkeypatch.setenv("RULEKIT_MAX_DEPTH", "5")
    monkeypatch.setenv("RULEKIT_FIELD_SEPARATOR", "::")

    config = load_config(str(path))
    assert config.dsl.default_syntax == "graphql"
    assert config.system.log_level == "DEBUG"
    assert config.dsl.max_depth == 5
    assert config.dsl.field_separator == "::"


def test_missing_file():
    with pytest.raises(ConfigurationError, match="not found"):
        load_config("/nonexistent/rulekit.json")


def test_invalid_json(tmp_path):
    path = tmp_path / "rulekit.json"
    path.write_text("{broken")
    with pytest.raises(ConfigurationError, match="Invalid JSON"):
        load_config(str(path))


def test_invalid_max_depth_env(monkeypatch):
    monkeypatch.setenv("RULEKIT_MAX_DEPTH", "deep")
    with pytest.raises(ConfigurationError, match="RULEKIT_MAX_DEPTH"):
        load_config()


@pytest.mark.parametrize("config,message", [
    (RulekitConfig(system=SystemConfig(log_level="LOUD")), "Invalid log level"),
    (RulekitConfig(dsl=DSLConfig(default_syntax="xpath")), "Unsupported default syntax"),
    (RulekitConfig(dsl=DSLConfig(field_separator="")), "Field separator"),
    (RulekitConfig(dsl=DSLConfig(max_depth=0)), "Max depth"),
])
def test_validate_rejects_bad_values(config, message):
    with pytest.raises(ConfigurationError, match=message):
        config.validate()


def test_manager_requires_load():
    manager = ConfigManager()
    with pytest.raises(ConfigurationError, match="not loaded"):
        manager.config
    config = manager.load()
    assert manager.config is config


def test_to_dict():
    assert RulekitConfig().to_dict()["dsl"] == {
        "default_syntax": "expression",
        "field_separator": ".",
        "max_depth": 64,
    }
