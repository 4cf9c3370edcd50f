"""Local persistence of the API key and resume profile."""

from cover_letter.store.profile_store import ProfileStore

__all__ = ["ProfileStore"]
