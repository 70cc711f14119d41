import pytest

from core.config import VERSION, Config, load_config
from core.exceptions import ConfigurationError
from core.target import TargetDescriptor


def test_defaults():
    config = load_config({"TARGET": "svc:9000"})

    assert config.target_descriptor == TargetDescriptor("svc", 9000)
    assert config.version == VERSION
    assert config.proxy.port == 8080
    assert config.proxy.host == "0.0.0.0"
    assert config.proxy.debug is False
    assert config.retry.max_attempts == 3
    assert config.retry.timeout == 10.0


def test_environment_overrides():
    config = load_config(
        {
            "TARGET": "svc",
            "PORT": "9999",
            "DEBUG_LOGS": "true",
            "APP_VERSION": "2.3.4",
            "RETRY_ATTEMPTS": "5",
            "RETRY_BASE_DELAY": "0.5",
            "FORWARD_TIMEOUT": "2",
        }
    )

    assert config.proxy.port == 9999
    assert config.proxy.debug is True
    assert config.version == "2.3.4"
    policy = config.retry.to_policy()
    assert policy.max_attempts == 5
    assert policy.base_delay == 0.5
    assert policy.timeout == 2.0


def test_empty_values_fall_back_to_defaults():
    config = load_config({"TARGET": "svc", "PORT": ""})
    assert config.proxy.port == 8080


def test_missing_target():
    with pytest.raises(ConfigurationError, match="TARGET"):
        load_config({})


def test_bad_target_fails_at_load():
    with pytest.raises(ConfigurationError):
        load_config({"TARGET": "svc:notaport"})


def test_invalid_value_is_config_error():
    with pytest.raises(ConfigurationError, match="Invalid configuration"):
        load_config({"TARGET": "svc", "RETRY_ATTEMPTS": "0"})


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("TARGET", "peers:7000")
    assert load_config().target_descriptor.port == 7000


def test_target_descriptor_is_parsed_once():
    config = load_config({"TARGET": "svc:9000"})

    assert config.target_descriptor is config.target_descriptor


def test_model_rejects_bad_target_directly():
    with pytest.raises(ConfigurationError):
        Config(target="svc:notaport")
