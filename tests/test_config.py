from poll_chat.config import Settings, load_settings


def test_defaults(monkeypatch):
    for name in (
        "POLL_CHAT_HOST",
        "POLL_CHAT_PORT",
        "POLL_CHAT_SWEEP_INTERVAL",
        "POLL_CHAT_MAX_IDLE",
        "POLL_CHAT_LOG_LEVEL",
        "POLL_CHAT_LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings == Settings()
    assert settings.port == 8081
    assert settings.sweep_interval == 60
    assert settings.max_idle == 900
    assert settings.log_file is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("POLL_CHAT_HOST", "127.0.0.1")
    monkeypatch.setenv("POLL_CHAT_PORT", "9000")
    monkeypatch.setenv("POLL_CHAT_SWEEP_INTERVAL", "5")
    monkeypatch.setenv("POLL_CHAT_MAX_IDLE", "30")
    monkeypatch.setenv("POLL_CHAT_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("POLL_CHAT_LOG_FILE", "logs/chatroom.log")

    settings = load_settings()

    assert settings.host == "127.0.0.1"
    assert settings.port == 9000
    assert settings.sweep_interval == 5.0
    assert settings.max_idle == 30.0
    assert settings.log_level == "debug"
    assert settings.log_file == "logs/chatroom.log"
