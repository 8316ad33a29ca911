import pytest
import yaml

from frognet_installer.errors import ConfigError
from frognet_installer.settings import ENV_KEYS, FrogNetSettings


def _settings(**kw):
    base = dict(
        domain="frognet.local",
        node_ip="10.101.0.1",
        interface="eth0",
        admin_username="admin",
        admin_password="s3cret-pass",
        installed_by="pi",
        node_id="abc123",
    )
    base.update(kw)
    return FrogNetSettings(**base)


def test_to_env_uses_all_keys():
    env = _settings().to_env()
    assert list(env) == list(ENV_KEYS.values())
    assert env["FROGNET_PASSWORD"] == "s3cret-pass"
    assert env["FROGNET_INSTALLED_BY"] == "pi"


def test_public_hides_password():
    public = _settings().public()
    assert "admin_password" not in public
    assert public["node_id"] == "abc123"


def test_password_not_in_repr():
    assert "s3cret-pass" not in repr(_settings())


@pytest.mark.parametrize(
    "field,value",
    [
        ("domain", "nodot"),
        ("domain", "bad_label.local"),
        ("node_ip", "10.101.0"),
        ("node_ip", "300.1.1.1"),
        ("interface", ""),
        ("admin_username", "Admin User"),
    ],
)
def test_validate_rejects(field, value):
    with pytest.raises(ConfigError):
        _settings(**{field: value}).validate()


def test_from_env_round_trip():
    original = _settings()
    loaded = FrogNetSettings.from_env(original.to_env())
    assert loaded == original


def test_from_env_reports_missing_keys():
    env = _settings().to_env()
    del env["FROGNET_NODE_IP"]
    del env["FROGNET_INTERFACE"]
    with pytest.raises(ConfigError) as exc:
        FrogNetSettings.from_env(env)
    assert "FROGNET_NODE_IP" in str(exc.value)
    assert "FROGNET_INTERFACE" in str(exc.value)


def test_yaml_block_password_rejected():
    password = yaml.safe_load("admin_password: |\n  s3cretpass\n")["admin_password"]
    assert password.endswith("\n")
    with pytest.raises(ConfigError, match="single line"):
        _settings(admin_password=password).validate()


@pytest.mark.parametrize("field", ["domain", "interface", "installed_by", "node_id"])
def test_control_characters_rejected(field):
    with pytest.raises(ConfigError):
        _settings(**{field: "eth0\r"}).validate()
