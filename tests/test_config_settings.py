from comit_client.config import Settings


def test_cnd_url_from_env(monkeypatch):
    """CND_URL in the environment overrides the default daemon address."""

    monkeypatch.setenv("CND_URL", "http://127.0.0.1:9000")

    settings = Settings()

    assert settings.cnd_url == "http://127.0.0.1:9000"


def test_poll_settings_from_env(monkeypatch):
    monkeypatch.setenv("POLL_INTERVAL_MS", "50")
    monkeypatch.setenv("POLL_TIMEOUT_MS", "1500")

    settings = Settings()

    assert settings.poll_interval_ms == 50
    assert settings.poll_timeout_ms == 1500


def test_defaults_suit_test_environments(monkeypatch):
    for name in ("CND_URL", "POLL_INTERVAL_MS", "POLL_TIMEOUT_MS"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.cnd_url == "http://localhost:8000"
    assert settings.poll_interval_ms < 1000
    assert settings.poll_timeout_ms < 10000
