"""Platform API client library.

Architecture:
- client.py: HTTP client with OAuth2 client-credentials authentication
- namespaces.py: Dynamic namespace provisioning
"""
from .client import (
    AccessToken,
    PlatformClient,
    DEFAULT_TOKEN_URL,
    REQUEST_TIMEOUT,
)
from .namespaces import (
    NamespaceResponse,
    NamespaceService,
    create_namespace,
)

__all__ = [
    "AccessToken",
    "PlatformClient",
    "DEFAULT_TOKEN_URL",
    "REQUEST_TIMEOUT",
    "NamespaceResponse",
    "NamespaceService",
    "create_namespace",
]
