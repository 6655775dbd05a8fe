"""Authentication: bearer credential lifecycle."""

from .credential_store import CredentialStore, SignOutCallback

__all__ = ["CredentialStore", "SignOutCallback"]
