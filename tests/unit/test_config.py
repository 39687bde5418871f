"""
Tests for configuration loading.
"""

from crm_browser_tests.config import Config, EnvSettings, get_env_settings


class TestConfig:
    """Config defaults and environment overrides."""

    def test_defaults(self):
        config = Config()
        assert config.viewport == {"width": 1280, "height": 720}
        assert config.max_retries == 3
        assert config.headless is True

    def test_page_url_joins_slashes(self):
        assert Config(base_url="http://crm.test/").page_url("/sales_module/ViewSales") == (
            "http://crm.test/sales_module/ViewSales"
        )
        assert Config(base_url="http://crm.test").page_url("signin") == "http://crm.test/signin"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("EMAIL", "qa@example.com")
        monkeypatch.setenv("PASSWORD", "secret")
        monkeypatch.setenv("TEST_URL", "https://staging.crm.example.com")
        monkeypatch.setenv("HEADLESS", "false")

        config = Config.from_env(EnvSettings(_env_file=None))

        assert config.email == "qa@example.com"
        assert config.password == "secret"
        assert config.base_url == "https://staging.crm.example.com"
        assert config.headless is False

    def test_overrides_win_and_none_is_ignored(self, monkeypatch):
        monkeypatch.setenv("TEST_URL", "https://staging.crm.example.com")
        settings = EnvSettings(_env_file=None)

        config = Config.from_env(settings, base_url=None, max_retries=0, headless=False)

        assert config.base_url == "https://staging.crm.example.com"
        assert config.max_retries == 0
        assert config.headless is False

    def test_missing_credentials_warns(self, monkeypatch, caplog):
        monkeypatch.delenv("EMAIL", raising=False)
        monkeypatch.delenv("PASSWORD", raising=False)

        Config.from_env(EnvSettings(_env_file=None))

        assert "EMAIL/PASSWORD not set" in caplog.text

    def test_settings_cached(self):
        get_env_settings.cache_clear()
        assert get_env_settings() is get_env_settings()
        get_env_settings.cache_clear()
