"""
Session storage for the storefront.

The store is an opaque key-value string store holding the auth `token` and the
display `username` (plus `balance` after login). Clients never read it
directly: callers take a `SessionContext` snapshot and pass it in explicitly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional

TOKEN_KEY = "token"
USERNAME_KEY = "username"
BALANCE_KEY = "balance"


class SessionStore(ABC):
    """Every credential store backing the storefront must implement this interface."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value or None."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a string value."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every stored value (logout)."""

    def context(self) -> "SessionContext":
        return SessionContext(token=self.get(TOKEN_KEY), username=self.get(USERNAME_KEY))


class InMemorySessionStore(SessionStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = str(value)

    def clear(self) -> None:
        self._values.clear()


@dataclass(frozen=True)
class SessionContext:
    token: Optional[str] = None
    username: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def auth_headers(self) -> Dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def __repr__(self) -> str:
        token = "***" if self.token else None
        return f"SessionContext(token={token!r}, username={self.username!r})"


def store_login(store: SessionStore, token: str, username: str, balance: Optional[float] = None) -> SessionContext:
    store.set(TOKEN_KEY, token)
    store.set(USERNAME_KEY, username)
    if balance is not None:
        store.set(BALANCE_KEY, str(balance))
    return store.context()


def logout(store: SessionStore) -> None:
    store.clear()


def display_identity(store: SessionStore) -> Optional[str]:
    """Username shown in the header when logged in, else None."""
    return store.get(USERNAME_KEY)
