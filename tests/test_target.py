import pytest

from core.exceptions import ConfigurationError
from core.target import TargetDescriptor, parse_target


def test_host_and_port():
    assert parse_target("host:9000") == TargetDescriptor("host", 9000)


def test_port_defaults_to_80():
    target = parse_target("host")
    assert target.hostname == "host"
    assert target.port == 80


def test_whitespace_is_stripped():
    assert parse_target("  svc.default.svc.cluster.local:8081 \n") == TargetDescriptor(
        "svc.default.svc.cluster.local", 8081
    )


@pytest.mark.parametrize("value", [None, "", "   "])
def test_missing_target_is_config_error(value):
    with pytest.raises(ConfigurationError):
        parse_target(value)


@pytest.mark.parametrize("value", ["host:http", "host:", "host:0", "host:70000", ":9000"])
def test_invalid_target_is_config_error(value):
    with pytest.raises(ConfigurationError):
        parse_target(value)


def test_url_for_keeps_path_and_query():
    target = TargetDescriptor("svc", 9000)
    assert target.url_for("10.0.0.1", "/config?x=1") == "http://10.0.0.1:9000/config?x=1"
    assert str(target) == "svc:9000"
