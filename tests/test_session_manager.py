import requests
from requests.adapters import HTTPAdapter

from cloudflare_bypass import (
    CLOUDFLARE_CURVE_PREFERENCES,
    CloudflareBypassAdapter,
    Options,
    SessionManager,
    mount_cloudflare_bypass,
)
from cloudflare_bypass.config import DEFAULT_ACCEPT, DEFAULT_USER_AGENT
from conftest import make_response


def test_session_has_bypass_adapters_mounted():
    session = SessionManager().get_session()

    for url in ("https://example.com/", "http://example.com/"):
        adapter = session.get_adapter(url)
        assert isinstance(adapter, CloudflareBypassAdapter)
        assert adapter.inner.get_tls_config().curve_preferences == list(CLOUDFLARE_CURVE_PREFERENCES)


def test_session_defaults_do_not_shadow_injected_headers():
    session = SessionManager().get_session()

    assert "User-Agent" not in session.headers
    assert "Accept" not in session.headers
    # Unrelated session defaults stay
    assert "Accept-Encoding" in session.headers


def test_disabled_injection_keeps_session_defaults():
    session = mount_cloudflare_bypass(
        requests.Session(),
        Options(add_missing_headers=False, headers={"User-Agent": "x"}),
    )

    assert session.headers["User-Agent"].startswith("python-requests/")


def test_request_through_session_carries_browser_headers(monkeypatch):
    seen = []

    def fake_send(self, request, **kwargs):
        seen.append(request)
        return make_response(request)

    monkeypatch.setattr(HTTPAdapter, "send", fake_send)
    session = SessionManager().get_session()

    response = session.get("https://example.com/", headers={"Accept-Language": "fr"})

    assert response.status_code == 200
    request = seen[0]
    assert request.headers["User-Agent"] == DEFAULT_USER_AGENT
    assert request.headers["Accept"] == DEFAULT_ACCEPT
    assert request.headers["Accept-Language"] == "fr"
