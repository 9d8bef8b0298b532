"""Low-level HTTP client for the Platform API.

Handles the OAuth2 client-credentials token request and authenticated
JSON calls.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from ..exceptions import OAuthError, PlatformAPIError, PlatformAPITimeoutError, UnknownError

REQUEST_TIMEOUT = 60
DEFAULT_TOKEN_URL = "https://login.microsoftonline.com/{tenant}/oauth2/v2.0/token"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessToken:
    token_type: str
    access_token: str

    def __repr__(self) -> str:
        return f"AccessToken(token_type={self.token_type!r}, access_token='***')"


class PlatformClient:
    """HTTP client for the Platform API.

    Usage:
        client = PlatformClient("platform.example.com")
        client.authenticate("tenant.onmicrosoft.com", "client-id", "secret", "api://platform/.default")
        response = client.post("/namespace", json={...})
    """

    def __init__(
        self,
        hostname: str,
        token_url_template: str = DEFAULT_TOKEN_URL,
        timeout: float = REQUEST_TIMEOUT,
    ):
        """Initialize Platform API client.

        Args:
            hostname: Platform API hostname, optionally with scheme
            token_url_template: Token endpoint, ``{tenant}`` is substituted
            timeout: Timeout in seconds for every request
        """
        hostname = hostname.rstrip("/")
        if "://" not in hostname:
            hostname = f"https://{hostname}"
        self.base_url = hostname
        self.token_url_template = token_url_template
        self.timeout = timeout
        self._token: Optional[AccessToken] = None

    def authenticate(self, tenant: str, client_id: str, client_secret: str, scope: str) -> AccessToken:
        """Fetch a bearer token using the client credentials flow.

        Args:
            tenant: Identity provider tenant
            client_id: OAuth client ID
            client_secret: OAuth client secret
            scope: Requested scope

        Returns:
            Access token, also stored for subsequent calls

        Raises:
            OAuthError: If the token endpoint refuses or returns a non-bearer token
        """
        url = self.token_url_template.format(tenant=tenant)
        data = {
            "grant_type": "client_credentials",
            "client_id": client_id,
            "client_secret": client_secret,
            "scope": scope,
        }
        logger.debug("requesting client credentials token from %s for client %s", url, client_id)
        try:
            resp = requests.post(url, data=data, timeout=self.timeout)
        except requests.RequestException as e:
            raise UnknownError(f"Got an unknown error communicating with the OAuth API: {e}") from e
        if not 200 <= resp.status_code < 300:
            raise OAuthError(resp.status_code, resp.text)
        try:
            body = resp.json()
            token = AccessToken(token_type=body["token_type"], access_token=body["access_token"])
        except (ValueError, KeyError, TypeError) as e:
            raise OAuthError(resp.status_code, f"Malformed token response: {e}") from e
        if token.token_type.lower() != "bearer":
            raise OAuthError(resp.status_code, f"Unknown token type: {token.token_type}")
        self._token = token
        return token

    def post(self, path: str, json: Optional[Dict[str, Any]] = None, **kwargs) -> requests.Response:
        """Execute an authenticated POST request.

        Args:
            path: API endpoint path (e.g., "/namespace")
            json: JSON payload
            **kwargs: Additional arguments for requests.post

        Returns:
            Response object

        Raises:
            PlatformAPITimeoutError: If the request timed out
            PlatformAPIError: On HTTP error status
            UnknownError: On any other transport failure
        """
        if self._token is None:
            raise UnknownError("Not authenticated - call authenticate first")
        url = f"{self.base_url}{path}"
        headers = dict(kwargs.pop("headers", {}))
        headers["Authorization"] = f"Bearer {self._token.access_token}"

        try:
            resp = requests.post(url, json=json, headers=headers, timeout=self.timeout, **kwargs)
        except requests.Timeout as e:
            raise PlatformAPITimeoutError(self.timeout) from e
        except requests.RequestException as e:
            raise UnknownError(f"Got an unknown error communicating with the Platform API: {e}") from e
        self._handle_error(resp)
        return resp

    def _handle_error(self, resp: requests.Response) -> None:
        if not 200 <= resp.status_code < 300:
            raise PlatformAPIError(resp.status_code, resp.text)
