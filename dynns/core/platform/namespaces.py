"""Dynamic namespace operations on the Platform API."""
from __future__ import annotations
import logging
from dataclasses import dataclass

from ..exceptions import UnknownError
from ..payload import NamespaceRequest
from .client import PlatformClient

NAMESPACE_PATH = "/namespace"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NamespaceResponse:
    message: str
    namespace: str
    expiry: str

    def __str__(self) -> str:
        return f"message: {self.message}\nnamespace: {self.namespace}\nexpiry: {self.expiry}"


class NamespaceService:
    """Service for provisioning dynamic namespaces."""

    def __init__(self, client: PlatformClient):
        """Initialize namespace service.

        Args:
            client: Authenticated Platform API client
        """
        self.client = client

    def create(self, request: NamespaceRequest) -> NamespaceResponse:
        """Submit a namespace request.

        Args:
            request: Assembled namespace request

        Returns:
            Decoded API response

        Raises:
            UnknownError: If the response body cannot be decoded
        """
        logger.info(
            "submitting request body to %s%s: %s",
            self.client.base_url,
            NAMESPACE_PATH,
            request.to_json(),
        )
        resp = self.client.post(NAMESPACE_PATH, json=request.to_dict())
        try:
            body = resp.json()
            return NamespaceResponse(
                message=str(body["message"]),
                namespace=str(body["namespace"]),
                expiry=str(body["expiry"]),
            )
        except (ValueError, KeyError, TypeError) as e:
            raise UnknownError(f"Error decoding API Response: {e}") from e


def create_namespace(client: PlatformClient, request: NamespaceRequest) -> NamespaceResponse:
    return NamespaceService(client).create(request)
