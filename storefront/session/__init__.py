from .store import InMemorySessionStore, SessionContext, SessionStore, display_identity, logout, store_login

__all__ = [
    "InMemorySessionStore",
    "SessionContext",
    "SessionStore",
    "display_identity",
    "logout",
    "store_login",
]
