"""Settings loader with command-line, Docker secrets and environment fallback."""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dynns.core.exceptions import EnvironmentConfigError
from dynns.core.platform.client import DEFAULT_TOKEN_URL, REQUEST_TIMEOUT

HOSTNAME_ENV_VAR = "PLATFORM_API_HOSTNAME"
CLUSTER_ENV_VAR = "PLATFORM_API_CLUSTER"
TENANT_ENV_VAR = "PLATFORM_API_TENANT"
SCOPE_ENV_VAR = "SCOPE"
CLIENT_ID_ENV_VAR = "CLIENT_ID"
CLIENT_SECRET_ENV_VAR = "CLIENT_SECRET"
TOKEN_URL_ENV_VAR = "DYNNS_TOKEN_URL"
REQUEST_TIMEOUT_ENV_VAR = "DYNNS_REQUEST_TIMEOUT"

SECRETS_DIR = "/run/secrets"

logger = logging.getLogger(__name__)


def _load_secret_from_file(secret_name: str, env_var: str | None = None) -> str | None:
    """
    Load secret from /run/secrets (Docker secrets pattern).

    Priority:
    1. /run/secrets/{secret_name}
    2. Environment variable (fallback)

    Returns:
        Secret value or None if not found
    """
    secret_file = Path(SECRETS_DIR) / secret_name
    if secret_file.exists() and secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
            if secret_value:
                logger.debug("loaded %s from %s", secret_name, SECRETS_DIR)
                return secret_value
        except OSError as e:
            logger.warning("failed to read %s/%s: %s", SECRETS_DIR, secret_name, e)

    if env_var:
        secret_value = os.getenv(env_var)
        if secret_value:
            return secret_value
    return None


def resolve_option(value: Optional[str], env_var: str, option: str) -> str:
    """Return the CLI value, else the environment variable.

    Raises:
        EnvironmentConfigError: If neither is set
    """
    if value:
        return value
    env_value = os.environ.get(env_var)
    if env_value:
        return env_value
    raise EnvironmentConfigError(
        f"'--{option}' option missing and could not read {env_var} env var"
    )


def _require_env(name: str, secret_name: str | None = None) -> str:
    value = _load_secret_from_file(secret_name, name) if secret_name else os.environ.get(name)
    if not value:
        raise EnvironmentConfigError(f"Could not get '{name}' from environment")
    return value


@dataclass
class OAuthCredentials:
    """Client credentials for the identity provider."""
    scope: str
    client_id: str
    client_secret: str

    def __repr__(self) -> str:
        return f"OAuthCredentials(scope={self.scope!r}, client_id={self.client_id!r}, client_secret='***')"


@dataclass
class ClientSettings:
    """Everything needed to reach the Platform API."""
    hostname: str
    cluster: str
    tenant: str
    token_url_template: str = DEFAULT_TOKEN_URL
    request_timeout: float = REQUEST_TIMEOUT


def load_oauth_credentials() -> OAuthCredentials:
    """Read SCOPE, CLIENT_ID and CLIENT_SECRET.

    CLIENT_SECRET may also be mounted as /run/secrets/client_secret.

    Raises:
        EnvironmentConfigError: If a value is missing
    """
    return OAuthCredentials(
        scope=_require_env(SCOPE_ENV_VAR),
        client_id=_require_env(CLIENT_ID_ENV_VAR),
        client_secret=_require_env(CLIENT_SECRET_ENV_VAR, secret_name="client_secret"),
    )


def load_settings(
    hostname: Optional[str] = None,
    cluster: Optional[str] = None,
    tenant: Optional[str] = None,
) -> ClientSettings:
    """Resolve client settings, CLI values taking priority over environment.

    Raises:
        EnvironmentConfigError: If a required value is missing or malformed
    """
    timeout_raw = os.environ.get(REQUEST_TIMEOUT_ENV_VAR)
    timeout: float = REQUEST_TIMEOUT
    if timeout_raw:
        try:
            timeout = float(timeout_raw)
        except ValueError as e:
            raise EnvironmentConfigError(
                f"{REQUEST_TIMEOUT_ENV_VAR} must be a number of seconds, got {timeout_raw!r}"
            ) from e
        if timeout <= 0:
            raise EnvironmentConfigError(f"{REQUEST_TIMEOUT_ENV_VAR} must be positive")

    return ClientSettings(
        hostname=resolve_option(hostname, HOSTNAME_ENV_VAR, "hostname"),
        cluster=resolve_option(cluster, CLUSTER_ENV_VAR, "cluster"),
        tenant=resolve_option(tenant, TENANT_ENV_VAR, "tenant"),
        token_url_template=os.environ.get(TOKEN_URL_ENV_VAR) or DEFAULT_TOKEN_URL,
        request_timeout=timeout,
    )
