"""
Base class for machine translation connector plugins
"""

import logging
import threading
from abc import abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from Plugins.BasePlugin import BasePlugin
from Preferences import Preferences
from CredentialsManager import CredentialsManager
from .errors import ConfigurationError
from .transport import HttpTransport


@dataclass
class ConnectorSettings:
    """Values shown in and accepted from a connector's configuration dialog."""
    endpoint_url: str = ""
    endpoint_port: str = ""
    credential: str = ""
    persist_credential: bool = False


class BaseMachineTranslator(BasePlugin):
    """
    Abstract base class for machine translation connectors
    Defines the capability contract the host calls and keeps the
    host-side translation cache
    """

    plugin_type = "MachineTranslation"

    # Display name shown by the host
    name = "Machine Translation"

    def __init__(
        self,
        preferences: Optional[Preferences] = None,
        credentials: Optional[CredentialsManager] = None,
        transport: Optional[HttpTransport] = None
    ):
        """
        Args:
            preferences: Host preference store. Defaults to an in-memory store.
            credentials: Host credential store built on the same preferences.
            transport: HTTP transport; a default one is created when omitted.
        """
        self.preferences = preferences if preferences is not None else Preferences(path=None)
        self.credentials = credentials if credentials is not None else CredentialsManager(self.preferences)
        self.transport = transport if transport is not None else HttpTransport()
        self.logger = logging.getLogger(f"Plugins.MachineTranslation.{type(self).__name__}")
        self._cache: Dict[Tuple[str, str, str], str] = {}
        self._cache_lock = threading.Lock()

    def get_name(self) -> str:
        return self.name

    @abstractmethod
    def get_preference_name(self) -> str:
        """
        Name of the preference flag that enables this connector

        Returns:
            str: Preference key, e.g. "allow_mtuoc"
        """
        pass

    def is_enabled(self) -> bool:
        return self.preferences.is_preference(self.get_preference_name())

    def set_enabled(self, enabled: bool) -> None:
        self.preferences.set_preference(self.get_preference_name(), bool(enabled))
        self.logger.info(f"{self.get_name()} {'enabled' if enabled else 'disabled'}")

    @abstractmethod
    def translate(self, source_lang: str, target_lang: str, text: str) -> str:
        """
        Translate text by calling the remote service, bypassing the cache

        Args:
            source_lang (str): Source language tag, e.g. "en"
            target_lang (str): Target language tag, e.g. "ca"
            text (str): Text to translate

        Returns:
            str: Translated text

        Raises:
            MachineTranslationError: On configuration, transport or parse failures
        """
        pass

    def get_translation(self, source_lang: str, target_lang: str, text: str) -> str:
        """
        Translate text, answering repeated requests from the cache.
        Failed translations are not cached.
        """
        cached = self.get_cached_translation(source_lang, target_lang, text)
        if cached is not None:
            self.logger.debug(f"Cache hit for {source_lang}->{target_lang}")
            return cached
        result = self.translate(source_lang, target_lang, text)
        with self._cache_lock:
            self._cache[(source_lang, target_lang, text)] = result
        return result

    def get_cached_translation(self, source_lang: str, target_lang: str, text: str) -> Optional[str]:
        with self._cache_lock:
            return self._cache.get((source_lang, target_lang, text))

    def clear_cache(self) -> None:
        with self._cache_lock:
            self._cache.clear()

    def is_configurable(self) -> bool:
        return True

    def _apply_credential(self, credential_id: str, settings: ConnectorSettings) -> bool:
        """
        Stores the dialog's credential if the user changed it.

        The dialog is pre-filled with the effective credential, which may come
        from the transient tier. Storing it back unchanged would copy a
        session-only value into the preferences, so an unchanged value and
        persistence flag leave both tiers alone.

        Returns:
            bool: True if the credential was stored.
        """
        value = settings.credential.strip()
        if not value:
            return False
        unchanged = (value == self.credentials.get_credential(credential_id)
                     and settings.persist_credential == self.credentials.is_stored(credential_id))
        if unchanged:
            return False
        self.credentials.set_credential(credential_id, value, not settings.persist_credential)
        return True

    @abstractmethod
    def get_configuration(self) -> ConnectorSettings:
        """Current settings, used to fill in the configuration dialog"""
        pass

    @abstractmethod
    def apply_configuration(self, settings: ConnectorSettings) -> None:
        """Store settings confirmed in the configuration dialog"""
        pass

    def execute_pipeline_step(self, step_config: dict, context: dict) -> dict:
        """Translate a context value as a pipeline step

        Example step_config:
        {
            "plugin": "Mtuoc",
            "config": {
                "source_lang": "en",
                "target_lang": "ca",
                "data_key": "segment"
            },
            "output": "translation"
        }

        "text" may be given in config instead of "data_key".
        """
        config = step_config.get("config", {})
        source_lang = config.get("source_lang")
        target_lang = config.get("target_lang")
        if not source_lang or not target_lang:
            raise ConfigurationError(f"{self.get_name()} requires 'source_lang' and 'target_lang'")

        if "text" in config:
            text = config["text"]
        else:
            data_key = config.get("data_key")
            if not data_key:
                raise ConfigurationError(f"{self.get_name()} requires 'text' or 'data_key' in config")
            if data_key not in context:
                raise KeyError(f"Context key '{data_key}' not found.")
            text = context[data_key]

        if not isinstance(text, str):
            raise TypeError(f"{self.get_name()} can only translate a single string")

        output_key = step_config.get("output", "translation")
        return {output_key: self.get_translation(source_lang, target_lang, text)}
