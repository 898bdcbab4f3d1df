"""
Shared fixtures.

Every test gets an in-memory keyring so nothing touches the OS keychain.
"""

import keyring
import pytest
from keyring.errors import NoKeyringError, PasswordDeleteError


class MemoryKeyring:
    """Keyring backend holding passwords in a dict."""

    def __init__(self):
        self.passwords = {}

    def get_password(self, service, username):
        return self.passwords.get((service, username))

    def set_password(self, service, username, password):
        self.passwords[(service, username)] = password

    def delete_password(self, service, username):
        if self.passwords.pop((service, username), None) is None:
            raise PasswordDeleteError("Password not found")


class UnavailableKeyring:
    """Keyring backend for machines without a keychain."""

    def get_password(self, service, username):
        raise NoKeyringError("No recommended backend was available")

    def set_password(self, service, username, password):
        raise NoKeyringError("No recommended backend was available")

    def delete_password(self, service, username):
        raise NoKeyringError("No recommended backend was available")


@pytest.fixture(autouse=True)
def memory_keyring(monkeypatch):
    backend = MemoryKeyring()
    monkeypatch.setattr(keyring, "get_keyring", lambda: backend)
    return backend
