import importlib
import os
import sys

import pytest

# Ensure project root is on sys.path so 'app', 'config', and 'src' import correctly
_TESTS_DIR = os.path.dirname(__file__)
_ROOT_DIR = os.path.abspath(os.path.join(_TESTS_DIR, os.pardir))
if _ROOT_DIR not in sys.path:
    sys.path.insert(0, _ROOT_DIR)

from tests.support import stubs as test_stubs


_CONFIG_CONSUMERS = ("src.settings", "src.clients.backend", "app")


def _reload_config(monkeypatch):
    """Re-read the environment into a fresh ``Config`` and point importers at it.

    The previous class is restored on teardown so values read for one test
    never leak into the next.
    """
    import config

    importlib.reload(config)
    for name in _CONFIG_CONSUMERS:
        module = sys.modules.get(name)
        if module is not None:
            monkeypatch.setattr(module, "Config", config.Config)
    return config.Config


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Ensure a clean env for tests with known credentials."""
    monkeypatch.setenv("SPOTIFY_CLIENT_ID", "test-client-id")
    monkeypatch.setenv("SPOTIFY_CLIENT_SECRET", "test-client-secret")
    for name in ("REDIRECT_URI", "CLIENT_APP_URL", "PORT", "SPOTIFY_HTTP_TIMEOUT", "CORS_ALLOWED_ORIGINS"):
        monkeypatch.delenv(name, raising=False)
    _reload_config(monkeypatch)
    yield


@pytest.fixture
def reload_config(monkeypatch):
    """Call after changing env vars inside a test to rebuild ``Config``."""
    return lambda: _reload_config(monkeypatch)


@pytest.fixture
def app_settings():
    from src.settings import AppSettings

    return AppSettings(
        spotify_client_id="abc",
        spotify_client_secret="shh-secret",
        redirect_uri="http://localhost:8888/callback",
        client_app_url="http://localhost:3000",
    )


@pytest.fixture
def fake_spotify():
    return test_stubs.FakeSpotifyAPI()


@pytest.fixture
def app(app_settings, fake_spotify):
    import app as app_module

    application = app_module.create_app(settings=app_settings, spotify_api=fake_spotify)
    application.config["TESTING"] = True
    yield application


@pytest.fixture
def client(app):
    return app.test_client()
