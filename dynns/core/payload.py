"""Namespace request payload and its wire representation.

Usage:
    request = assemble("foo", "24h", "eu-1", "bar", labels={"env": "dev"})
    requests.post(url, json=request.to_dict())

Wire shape:
    {
        "productkey": "foo", "ttl": "24h", "cluster": "eu-1", "namespace": "bar",
        "labels": [{"key": "env", "value": "dev"}],        # omitted when empty
        "annotations": [...],                               # omitted when empty
        "vault_config": {"service_account_name": "..."},    # omitted without explicit accounts
        ...extra properties flattened at the top level
    }

Extra properties are written last, so a key such as ``ttl`` in the extra
data replaces the fixed field of the same name.
"""
from __future__ import annotations
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from .exceptions import ConfigurationError
from .labels import KeyValue
from .validators import require_non_empty
from .vault import VaultServiceAccounts

KeyValues = Union[Mapping[str, str], Iterable[KeyValue]]


def _to_pairs(values: Optional[KeyValues]) -> Tuple[KeyValue, ...]:
    if values is None:
        return ()
    if isinstance(values, Mapping):
        return tuple(KeyValue(k, v) for k, v in values.items())
    return tuple(values)


@dataclass(frozen=True)
class NamespaceRequest:
    product_key: str
    ttl: str
    cluster: str
    namespace: str
    labels: Tuple[KeyValue, ...] = ()
    annotations: Tuple[KeyValue, ...] = ()
    vault_service_accounts: VaultServiceAccounts = field(
        default_factory=VaultServiceAccounts.without_default
    )
    extra_properties: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "productkey": self.product_key,
            "ttl": self.ttl,
            "cluster": self.cluster,
            "namespace": self.namespace,
        }
        if self.labels:
            payload["labels"] = [pair.to_dict() for pair in self.labels]
        if self.annotations:
            payload["annotations"] = [pair.to_dict() for pair in self.annotations]
        if not self.vault_service_accounts.is_empty():
            payload["vault_config"] = self.vault_service_accounts.to_dict()
        payload.update(self.extra_properties)
        return payload

    def to_json(self, pretty: bool = False) -> str:
        if pretty:
            return json.dumps(self.to_dict(), indent=2)
        return json.dumps(self.to_dict(), separators=(",", ":"))


def assemble(
    product_key: str,
    ttl: str,
    cluster: str,
    namespace: str,
    labels: Optional[KeyValues] = None,
    annotations: Optional[KeyValues] = None,
    vault_service_accounts: Optional[VaultServiceAccounts] = None,
    extra_properties: Optional[Mapping[str, Any]] = None,
) -> NamespaceRequest:
    """Build the request sent to the platform API.

    Raises:
        ConfigurationError: If a required field is missing or blank
    """
    required = {
        "productkey": product_key,
        "ttl": ttl,
        "cluster": cluster,
        "namespace": namespace,
    }
    for name, value in required.items():
        try:
            require_non_empty(value, name)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

    return NamespaceRequest(
        product_key=product_key,
        ttl=ttl,
        cluster=cluster,
        namespace=namespace,
        labels=_to_pairs(labels),
        annotations=_to_pairs(annotations),
        vault_service_accounts=(
            vault_service_accounts
            if vault_service_accounts is not None
            else VaultServiceAccounts.without_default()
        ),
        extra_properties=dict(extra_properties or {}),
    )
