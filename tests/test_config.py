def test_config_reads_spotify_credentials(monkeypatch, reload_config):
    monkeypatch.setenv("SPOTIFY_CLIENT_ID", "abc")
    monkeypatch.setenv("SPOTIFY_CLIENT_SECRET", "def")

    Config = reload_config()

    assert Config.SPOTIFY_CLIENT_ID == "abc"
    assert Config.SPOTIFY_CLIENT_SECRET == "def"


def test_config_bad_numbers_fall_back_to_defaults(monkeypatch, reload_config):
    monkeypatch.setenv("PORT", "not-a-port")
    monkeypatch.setenv("SPOTIFY_HTTP_TIMEOUT", "soon")

    Config = reload_config()

    assert Config.PORT == 8888
    assert Config.SPOTIFY_HTTP_TIMEOUT is None


def test_config_csv_origins(monkeypatch, reload_config):
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "http://a.test, http://b.test")

    Config = reload_config()

    assert Config.CORS_ALLOWED_ORIGINS == ["http://a.test", "http://b.test"]


def test_env_changes_do_not_leak_between_tests():
    from src.settings import Config

    assert Config.SPOTIFY_CLIENT_ID == "test-client-id"
    assert Config.PORT == 8888
    assert Config.CORS_ALLOWED_ORIGINS == ["*"]
