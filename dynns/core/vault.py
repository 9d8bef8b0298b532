"""Vault service accounts attached to a namespace.

The ``default`` account is tracked as a flag rather than a list entry:

    >>> build(None, []).to_string()
    'default,'
    >>> build("a, b", ["default"]).to_string()
    'default,a,b'

The bare ``default,`` rendering keeps its trailing comma. Requests only
carry ``vault_config`` when at least one explicit account was added.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

DEFAULT_ACCOUNT = "default"


@dataclass
class VaultServiceAccounts:
    include_default: bool = True
    accounts: List[str] = field(default_factory=list)

    @classmethod
    def without_default(cls) -> "VaultServiceAccounts":
        return cls(include_default=False)

    def extend(self, values: Iterable[str]) -> None:
        """Add accounts in order; ``default`` only switches the flag on."""
        for value in values:
            if value == DEFAULT_ACCOUNT:
                self.include_default = True
            else:
                self.accounts.append(value)

    def is_empty(self) -> bool:
        """True when no explicit account was given; the payload then omits vault_config."""
        return not self.accounts or self.to_string() == ""

    def to_string(self) -> str:
        if not self.accounts and not self.include_default:
            return ""
        joined = ",".join(self.accounts)
        if self.include_default:
            return f"{DEFAULT_ACCOUNT},{joined}"
        return joined

    def to_dict(self) -> dict:
        return {"service_account_name": self.to_string()}


def split_raw(raw: str) -> List[str]:
    return [part.strip() for part in raw.split(",")]


def build(raw_override: Optional[str] = None, additions: Iterable[str] = ()) -> VaultServiceAccounts:
    """Accumulate the final service account list.

    Args:
        raw_override: Comma-separated list replacing the implicit default
        additions: Individually supplied accounts, applied after the raw list

    Returns:
        VaultServiceAccounts ready for rendering
    """
    if raw_override is not None:
        accounts = VaultServiceAccounts.without_default()
        accounts.extend(split_raw(raw_override))
    else:
        accounts = VaultServiceAccounts()
    accounts.extend(additions)
    return accounts
