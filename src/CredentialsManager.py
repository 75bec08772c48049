"""
CredentialsManager module.

Two-tier credential lookup for connector secrets such as API keys:

1. A transient, process-lifetime store held explicitly by the manager. It can be
   seeded from a ``.env`` file and the process environment.
2. A durable store inside the host preferences, where values are Base64 encoded.
   This is obfuscation only; the values are not encrypted.

A lookup that finds nothing returns ``None``, which callers treat as
"not configured".
"""

import os
import base64
import binascii
import logging
import threading
from typing import Dict, Iterable, Optional

import dotenv

from Preferences import Preferences

PERSISTED_PREFIX = "credential."


def env_var_name(credential_id: str) -> str:
    """Maps a credential id like ``microsoft.api.subscription_key`` to its environment variable name."""
    return credential_id.replace(".", "_").replace("-", "_").upper()


class TransientCredentialStore:
    """In-process credential values that are never written to disk."""

    def __init__(self, values: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(values or {})
        self._lock = threading.Lock()

    @classmethod
    def from_environment(cls, credential_ids: Iterable[str], env_file: Optional[str] = None) -> "TransientCredentialStore":
        """
        Builds a store from a ``.env`` file and the process environment.

        The process environment wins over the file. Neither source is modified.

        Args:
            credential_ids: Credential ids to look for.
            env_file: Optional path of a dotenv file.
        """
        file_values = {}
        if env_file and os.path.exists(env_file):
            file_values = dotenv.dotenv_values(env_file)
        values = {}
        for credential_id in credential_ids:
            name = env_var_name(credential_id)
            value = os.environ.get(name) or file_values.get(name)
            if value:
                values[credential_id] = value
        return cls(values)

    def get(self, credential_id: str) -> Optional[str]:
        with self._lock:
            return self._values.get(credential_id)

    def set(self, credential_id: str, value: str) -> None:
        with self._lock:
            self._values[credential_id] = value

    def remove(self, credential_id: str) -> None:
        with self._lock:
            self._values.pop(credential_id, None)

    def __contains__(self, credential_id: str) -> bool:
        return bool(self.get(credential_id))


class CredentialsManager:
    """
    Stores and retrieves connector credentials.

    Attributes:
        preferences (Preferences): Durable store for encoded credentials.
        transient (TransientCredentialStore): Process-lifetime values.
    """

    def __init__(self, preferences: Preferences, transient: Optional[TransientCredentialStore] = None):
        self.preferences = preferences
        self.transient = transient if transient is not None else TransientCredentialStore()
        self.logger = logging.getLogger(__name__)

    def set_credential(self, credential_id: str, value: str, temporary: bool) -> None:
        """
        Stores a credential.

        The value always goes into the transient store. When ``temporary`` is
        False it is also persisted (Base64 encoded) in the preferences; when
        True any previously persisted value is cleared.

        Args:
            credential_id: Key of the credential.
            value: Plain text value.
            temporary: Keep the value for this process only.
        """
        self.transient.set(credential_id, value)
        if temporary:
            self._store(credential_id, "")
        else:
            self._store(credential_id, value)
        self.logger.info(f"Credential '{credential_id}' stored ({'temporary' if temporary else 'persistent'})")

    def get_credential(self, credential_id: str) -> Optional[str]:
        """
        Looks up a credential in the transient store, then the durable store.

        Returns:
            The plain text value, or None when the credential is not configured.
        """
        value = self.transient.get(credential_id)
        if value:
            return value
        return self.retrieve(credential_id)

    def retrieve(self, credential_id: str) -> Optional[str]:
        """Returns the decoded durable value, or None."""
        encoded = self.preferences.get_preference_default(PERSISTED_PREFIX + credential_id, "")
        if not encoded:
            return None
        try:
            decoded = base64.b64decode(encoded.encode("ascii"), validate=True).decode("utf-8")
        except (binascii.Error, UnicodeError, ValueError) as e:
            self.logger.warning(f"Stored credential '{credential_id}' could not be decoded: {e}")
            return None
        return decoded or None

    def is_stored(self, credential_id: str) -> bool:
        """True when a durable value exists for ``credential_id``."""
        return self.retrieve(credential_id) is not None

    def is_stored_temporarily(self, credential_id: str) -> bool:
        """True when the credential only exists in the transient store."""
        return not self.is_stored(credential_id) and credential_id in self.transient

    def clear(self, credential_id: str) -> None:
        self.transient.remove(credential_id)
        self.preferences.remove_preference(PERSISTED_PREFIX + credential_id)

    def _store(self, credential_id: str, value: str) -> None:
        key = PERSISTED_PREFIX + credential_id
        if not value:
            self.preferences.remove_preference(key)
            return
        encoded = base64.b64encode(value.encode("utf-8")).decode("ascii")
        self.preferences.set_preference(key, encoded)
