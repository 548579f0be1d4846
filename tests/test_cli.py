import pytest

import cli
from comit_client.providers.cnd import Cnd

from conftest import FakeCnd


@pytest.fixture
def daemon(monkeypatch) -> FakeCnd:
    fake = FakeCnd(peer_id="QmCli")
    monkeypatch.setattr(cli, "Cnd", lambda base_url=None: Cnd(base_url or "http://cnd.test", transport=fake.transport))
    monkeypatch.setattr(cli, "setup_logging", lambda level=None: None)
    return fake


def test_no_command_prints_help(capsys):
    assert cli.main([]) == 0
    assert "usage" in capsys.readouterr().out


def test_info(daemon, capsys):
    assert cli.main(["info"]) == 0

    out = capsys.readouterr().out
    assert "QmCli" in out
    assert "/ip4/127.0.0.1/tcp/9939" in out


def test_swap_shows_actions(daemon, capsys):
    swap_id = daemon.add_swap("Start")

    assert cli.main(["swap", f"/swaps/{swap_id}"]) == 0

    out = capsys.readouterr().out
    assert "State: Start" in out
    assert "accept" in out
    assert "<address>" in out
    assert "= 43200" in out


def test_poll_reaches_state(daemon, capsys):
    swap_id = daemon.add_swap("Accepted")

    assert cli.main(["poll", f"/swaps/{swap_id}", "Accepted", "--interval-ms", "1", "--timeout-ms", "50"]) == 0
    assert "Reached target state" in capsys.readouterr().out


def test_poll_timeout_is_reported(daemon, capsys):
    swap_id = daemon.add_swap("Start")

    assert cli.main(["poll", f"/swaps/{swap_id}", "Redeemed", "--interval-ms", "1", "--timeout-ms", "5"]) == 1
    assert "'Start'" in capsys.readouterr().out


def test_problem_is_reported(daemon, capsys):
    assert cli.main(["swap", "/swaps/999999"]) == 1
    assert "404 Swap not found." in capsys.readouterr().out


def test_dial(daemon, capsys):
    assert cli.main(["dial", "http://other.test"]) == 0
    assert daemon.dialed == [["/ip4/127.0.0.1/tcp/9939"]]
