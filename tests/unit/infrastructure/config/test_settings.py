from geocli.infrastructure.config import settings


def test_defaults_when_nothing_configured():
    settings.load_configuration()
    assert settings.get_geocoding_url() == settings.DEFAULT_GEOCODING_URL
    assert settings.get_api_key() is None
    assert settings.get_log_level() == "WARNING"


def test_yaml_file_is_flattened(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        "geocoding:\n"
        "  url: https://yaml.example/geocode\n"
        "  api_key: yaml-key\n"
        "logging:\n"
        "  level: debug\n",
        encoding="utf-8",
    )

    settings.load_configuration(config_file=config_file)

    assert settings.get_geocoding_url() == "https://yaml.example/geocode"
    assert settings.get_api_key() == "yaml-key"
    assert settings.get_log_level() == "DEBUG"


def test_environment_overrides_yaml(tmp_path, monkeypatch):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("geocoding:\n  url: https://yaml.example/geocode\n", encoding="utf-8")
    monkeypatch.setenv("GEOCLI_GEOCODING_URL", "https://env.example/geocode")

    settings.load_configuration(config_file=config_file)

    assert settings.get_geocoding_url() == "https://env.example/geocode"


def test_google_maps_api_key_fallback(monkeypatch):
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "google-key")
    assert settings.get_api_key() == "google-key"


def test_dotenv_file_is_loaded(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("GEOCLI_GEOCODING_API_KEY=dotenv-key\n", encoding="utf-8")
    # register for cleanup, load_dotenv writes straight into os.environ
    monkeypatch.setenv("GEOCLI_GEOCODING_API_KEY", "placeholder")
    monkeypatch.delenv("GEOCLI_GEOCODING_API_KEY")

    settings.load_configuration()

    assert settings.get_api_key() == "dotenv-key"


def test_env_values_are_coerced(monkeypatch):
    monkeypatch.setenv("GEOCLI_FEATURE_ENABLED", "true")
    monkeypatch.setenv("GEOCLI_RETRY_COUNT", "3")
    monkeypatch.setenv("GEOCLI_RATIO", "0.5")

    assert settings.get_config("feature.enabled") is True
    assert settings.get_config("retry.count") == 3
    assert settings.get_config("ratio") == 0.5


def test_test_config_has_highest_priority(monkeypatch):
    monkeypatch.setenv("GEOCLI_GEOCODING_URL", "https://env.example/geocode")
    settings.set_config_for_testing({"geocoding.url": "https://test.example/geocode"})
    assert settings.get_geocoding_url() == "https://test.example/geocode"

    settings.clear_test_config()
    assert settings.get_geocoding_url() == "https://env.example/geocode"


def test_invalid_yaml_is_ignored(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("geocoding: [unclosed\n", encoding="utf-8")

    settings.load_configuration(config_file=config_file)

    assert settings.get_geocoding_url() == settings.DEFAULT_GEOCODING_URL
