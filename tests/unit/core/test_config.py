"""Unit tests for ClientConfig."""

from __future__ import annotations

from rallyrest.core import DEFAULT_SERVER, ClientConfig


class TestClientConfig:
    """Test configuration defaults and environment loading."""

    def test_defaults(self):
        config = ClientConfig()
        assert config.server == DEFAULT_SERVER
        assert config.wsapi_url == "https://rally1.rallydev.com/slm/webservice/v2.0"
        assert config.timeout == 30.0
        assert not config.uses_api_key

    def test_wsapi_url_custom(self):
        config = ClientConfig(server="http://www.acme.com/", api_version="v3.0")
        assert config.wsapi_url == "http://www.acme.com/slm/webservice/v3.0"

    def test_request_headers(self):
        config = ClientConfig(api_key="secret", headers={"Custom-Header": "value"})

        headers = config.request_headers()

        assert headers["zsessionid"] == "secret"
        assert headers["Custom-Header"] == "value"
        assert headers["X-RallyIntegrationVendor"] == "Rally Software, Inc."
        assert "X-RallyIntegrationVersion" in headers

    def test_no_session_header_without_key(self):
        assert "zsessionid" not in ClientConfig().request_headers()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("RALLY_API_KEY", "env-key")
        monkeypatch.setenv("RALLY_SERVER", "https://rally.example.com")
        monkeypatch.delenv("RALLY_USERNAME", raising=False)
        monkeypatch.delenv("RALLY_PASSWORD", raising=False)

        config = ClientConfig.from_env()

        assert config.api_key == "env-key"
        assert config.server == "https://rally.example.com"
        assert config.uses_api_key

    def test_from_env_explicit_values_win(self, monkeypatch):
        monkeypatch.setenv("RALLY_API_KEY", "env-key")

        config = ClientConfig.from_env(api_key="explicit", timeout=5.0)

        assert config.api_key == "explicit"
        assert config.timeout == 5.0
