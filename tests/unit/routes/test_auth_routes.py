from urllib.parse import parse_qs, urlsplit

import pytest

from src.clients.spotify_api import LOGIN_SCOPE, SpotifyAPIError


@pytest.mark.unit
def test_login_redirects_to_spotify_authorize(client):
    r = client.get('/login')
    assert r.status_code == 302
    location = r.headers['Location']
    assert location.startswith('https://accounts.spotify.com/authorize?')
    assert 'client_id=abc' in location

    params = parse_qs(urlsplit(location).query)
    assert params['response_type'] == ['code']
    assert params['scope'] == [LOGIN_SCOPE]
    assert params['redirect_uri'] == ['http://localhost:8888/callback']


@pytest.mark.unit
def test_login_scope_is_fixed():
    assert LOGIN_SCOPE == (
        'playlist-modify-public playlist-modify-private user-read-playback-state '
        'user-modify-playback-state user-read-currently-playing streaming'
    )


@pytest.mark.unit
def test_callback_exchanges_code_and_redirects_with_tokens(client, fake_spotify):
    r = client.get('/callback?code=xyz')
    assert r.status_code == 302
    assert r.headers['Location'] == 'http://localhost:3000?access_token=A&refresh_token=R'

    assert fake_spotify.called('exchange_code') == [
        ('exchange_code', 'xyz', 'abc', 'shh-secret', 'http://localhost:8888/callback')
    ]


@pytest.mark.unit
def test_callback_exchange_failure_returns_500_without_secret(client, fake_spotify):
    fake_spotify.fail['exchange_code'] = SpotifyAPIError(400, {'error': 'invalid_grant'})

    r = client.get('/callback?code=bad')
    assert r.status_code == 500
    body = r.data.decode('utf-8')
    assert body == 'Error during authentication'
    assert 'shh-secret' not in body


@pytest.mark.unit
def test_callback_network_failure_returns_500(client, fake_spotify):
    fake_spotify.fail['exchange_code'] = SpotifyAPIError(None, 'connection refused')
    r = client.get('/callback?code=xyz')
    assert r.status_code == 500


@pytest.mark.unit
def test_callback_forwards_spotify_error_to_client_app(client, fake_spotify):
    r = client.get('/callback?error=access_denied')
    assert r.status_code == 302
    assert r.headers['Location'] == 'http://localhost:3000?error=access_denied'
    assert fake_spotify.called('exchange_code') == []


@pytest.mark.unit
def test_callback_appends_tokens_to_client_url_with_query(app_settings, fake_spotify):
    import app as app_module

    settings = app_settings.model_copy(update={'client_app_url': 'http://localhost:3000/app?x=1'})
    client = app_module.create_app(settings=settings, spotify_api=fake_spotify).test_client()

    r = client.get('/callback?code=xyz')
    assert r.status_code == 302
    assert r.headers['Location'] == 'http://localhost:3000/app?x=1&access_token=A&refresh_token=R'
