import json
import os
import stat

import pytest

from frognet_installer.errors import ConfigError
from frognet_installer.state_store import ensure_defaults, load_state, reset_progress, save_state


def test_missing_state_is_empty(tmp_path):
    assert load_state(str(tmp_path / "state.json")) == {}


def test_save_is_private_and_drops_secrets(tmp_path):
    path = tmp_path / "lib" / "state.json"
    state = ensure_defaults({"secrets": {"admin_password": "x"}})
    save_state(str(path), state)

    assert stat.S_IMODE(os.stat(path).st_mode) == 0o600
    data = json.loads(path.read_text())
    assert "secrets" not in data
    assert data["execution"]["completed_steps"] == []


def test_yaml_round_trip(tmp_path):
    path = tmp_path / "state.yaml"
    state = ensure_defaults({"frognet": {"domain": "frognet.local"}})
    save_state(str(path), state)
    assert load_state(str(path))["frognet"] == {"domain": "frognet.local"}


def test_non_mapping_rejected(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("[1, 2]")
    with pytest.raises(ConfigError, match="must be an object"):
        load_state(str(path))


@pytest.mark.parametrize("name, content", [("state.json", "{\"execution\": "), ("state.yaml", "a: [1, 2")])
def test_corrupt_state_rejected(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content)
    with pytest.raises(ConfigError, match="Corrupt state file"):
        load_state(str(path))


def test_reset_progress():
    state = ensure_defaults({})
    state["execution"]["completed_steps"] = ["10_preflight"]
    state["execution"]["errors"] = [{"step": "x", "error": "y"}]
    reset_progress(state)
    assert state["execution"]["completed_steps"] == []
    assert state["execution"]["errors"] == []


def test_answer_file_password_not_persisted(tmp_path):
    path = tmp_path / "state.json"
    state = ensure_defaults({"config": {"answers": {"domain": "frognet.local", "admin_password": "hunter2hunter2"}}})
    save_state(str(path), state)

    saved = json.loads(path.read_text())
    assert saved["config"]["answers"] == {"domain": "frognet.local"}
    # in-memory state keeps it for the running install
    assert state["config"]["answers"]["admin_password"] == "hunter2hunter2"
