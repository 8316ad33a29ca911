from unittest.mock import MagicMock

import requests

from frognet_installer.lib.registration import new_node_id, register_node


def _session(status=200, exc=None):
    session = MagicMock()
    if exc is not None:
        session.get.side_effect = exc
    else:
        response = MagicMock(status_code=status)
        if status >= 400:
            response.raise_for_status.side_effect = requests.HTTPError(f"{status} error")
        session.get.return_value = response
    return session


def test_new_node_id_is_unique_hex():
    a, b = new_node_id(), new_node_id()
    assert a != b
    assert len(a) == 32
    int(a, 16)


def test_register_sends_id_and_email():
    session = _session()
    assert register_node("https://reg.example/register", node_id="n1", email="a@b.c", session=session)
    session.get.assert_called_once_with(
        "https://reg.example/register", params={"id": "n1", "email": "a@b.c"}, timeout=10
    )


def test_register_failure_is_reported_not_raised():
    assert register_node("https://reg.example", node_id="n1", email="a@b.c", session=_session(status=500)) is False
    assert (
        register_node(
            "https://reg.example", node_id="n1", email="a@b.c", session=_session(exc=requests.ConnectionError("down"))
        )
        is False
    )


def test_plain_http_warns(caplog):
    register_node("http://reg.example", node_id="n1", email="a@b.c", session=_session())
    assert "not HTTPS" in caplog.text


def test_dry_run_skips_request():
    session = _session()
    assert register_node("https://reg.example", node_id="n1", email="a@b.c", session=session, dry_run=True)
    session.get.assert_not_called()
