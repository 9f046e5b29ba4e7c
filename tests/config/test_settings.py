from planner.config.settings import Settings


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)  # no .env
    for var in ("PLANNER_API_URL", "PLANNER_LOCALE", "LOG_LEVEL", "PLANNER_LOG_FILE"):
        monkeypatch.delenv(var, raising=False)

    settings = Settings()

    assert settings.api_url == "http://localhost:3333"
    assert settings.locale == "pt-BR"
    assert settings.log_level == "INFO"
    assert settings.storage_path.endswith("storage.json")
    assert settings.log_file is None


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PLANNER_API_URL", "https://api.planner.dev/")
    monkeypatch.setenv("PLANNER_LOCALE", "en")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("PLANNER_LOG_FILE", "~/planner.log")

    settings = Settings()

    assert settings.api_url == "https://api.planner.dev"
    assert settings.locale == "en"
    assert settings.log_level == "DEBUG"
    assert settings.log_file == "~/planner.log"


def test_invalid_values_fall_back(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PLANNER_LOCALE", "klingon")
    monkeypatch.setenv("LOG_LEVEL", "LOUD")

    settings = Settings()

    assert settings.locale == "pt-BR"
    assert settings.log_level == "INFO"
