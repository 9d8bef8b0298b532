import pytest

from dynns.config import settings
from dynns.core.exceptions import EXIT_CONFIG, EnvironmentConfigError
from dynns.core.platform.client import DEFAULT_TOKEN_URL


def test_resolve_option_prefers_cli_value(monkeypatch):
    monkeypatch.setenv("PLATFORM_API_CLUSTER", "from-env")
    assert settings.resolve_option("from-cli", "PLATFORM_API_CLUSTER", "cluster") == "from-cli"


def test_resolve_option_falls_back_to_env(monkeypatch):
    monkeypatch.setenv("PLATFORM_API_CLUSTER", "from-env")
    assert settings.resolve_option(None, "PLATFORM_API_CLUSTER", "cluster") == "from-env"


def test_resolve_option_missing():
    with pytest.raises(EnvironmentConfigError) as exc:
        settings.resolve_option(None, "PLATFORM_API_CLUSTER", "cluster")
    assert "'--cluster' option missing" in str(exc.value)
    assert "PLATFORM_API_CLUSTER" in str(exc.value)
    assert exc.value.exit_code == EXIT_CONFIG


def test_load_settings_from_env(platform_env):
    cfg = settings.load_settings()
    assert cfg.hostname == "platform.example.com"
    assert cfg.cluster == "eu-west-1"
    assert cfg.tenant == "example.onmicrosoft.com"
    assert cfg.token_url_template == DEFAULT_TOKEN_URL
    assert cfg.request_timeout == 60


def test_load_settings_overrides(platform_env, monkeypatch):
    monkeypatch.setenv("DYNNS_TOKEN_URL", "https://idp/{tenant}/token")
    monkeypatch.setenv("DYNNS_REQUEST_TIMEOUT", "5.5")
    cfg = settings.load_settings(hostname="other.example.com")
    assert cfg.hostname == "other.example.com"
    assert cfg.token_url_template == "https://idp/{tenant}/token"
    assert cfg.request_timeout == 5.5


@pytest.mark.parametrize("raw", ["soon", "0", "-1"])
def test_load_settings_rejects_bad_timeout(platform_env, monkeypatch, raw):
    monkeypatch.setenv("DYNNS_REQUEST_TIMEOUT", raw)
    with pytest.raises(EnvironmentConfigError, match="DYNNS_REQUEST_TIMEOUT"):
        settings.load_settings()


def test_load_oauth_credentials(platform_env, monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "SECRETS_DIR", str(tmp_path))
    creds = settings.load_oauth_credentials()
    assert creds.client_id == "client-id"
    assert creds.client_secret == "client-secret"
    assert creds.scope == "api://platform/.default"
    assert "client-secret" not in repr(creds)


def test_client_secret_read_from_run_secrets(platform_env, monkeypatch, tmp_path):
    (tmp_path / "client_secret").write_text("file-secret\n")
    monkeypatch.setattr(settings, "SECRETS_DIR", str(tmp_path))
    assert settings.load_oauth_credentials().client_secret == "file-secret"


def test_missing_oauth_variable(platform_env, monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "SECRETS_DIR", str(tmp_path))
    monkeypatch.delenv("CLIENT_ID")
    with pytest.raises(EnvironmentConfigError, match="CLIENT_ID"):
        settings.load_oauth_credentials()
