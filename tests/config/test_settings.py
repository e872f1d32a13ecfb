"""Tests for environment-driven settings."""

from apppack.config import Settings, get_settings


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for var in ("APPPACK_JSHINT_COMMAND", "APPPACK_JSHINT_TIMEOUT", "APPPACK_LOG_LEVEL", "APPPACK_LOG_DIR"):
        monkeypatch.delenv(var, raising=False)

    settings = Settings()

    assert settings.jshint_command == "jshint"
    assert settings.jshint_timeout == 30
    assert settings.log_level == "INFO"
    assert settings.log_dir is None


def test_environment_override(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("APPPACK_JSHINT_COMMAND", "/usr/local/bin/jshint")
    monkeypatch.setenv("APPPACK_JSHINT_TIMEOUT", "90")

    settings = get_settings()

    assert settings.jshint_command == "/usr/local/bin/jshint"
    assert settings.jshint_timeout == 90


def test_dotenv_file(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("APPPACK_LOG_LEVEL", raising=False)
    (tmp_path / ".env").write_text("APPPACK_LOG_LEVEL=DEBUG\nUNRELATED=1\n", encoding="utf-8")

    assert Settings().log_level == "DEBUG"
