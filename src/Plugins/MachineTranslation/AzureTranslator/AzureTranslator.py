"""
Azure Translator plugin for the Microsoft Translator Text API v3.

Design notes:
- The subscription key is a credential: it is looked up in the transient
  store first, then in the encoded copy kept in the host preferences
- An optional region is sent for regional and multi-service resources
- A custom endpoint URL may replace the global one
"""

from typing import Optional

from Plugins.MachineTranslation.BaseMachineTranslator.BaseMachineTranslator import (
    BaseMachineTranslator,
    ConnectorSettings,
)
from Plugins.MachineTranslation.BaseMachineTranslator.errors import ConfigurationError
from .AzureTranslatorV3 import AzureTranslatorV3


class AzureTranslator(BaseMachineTranslator):
    """Connector for Azure Translator"""

    plugin_type = "MachineTranslation"
    required_host_version = "1.0.0"
    name = "Azure Translator"

    ALLOW_MICROSOFT_TRANSLATE = "allow_microsoft_translate"
    PROPERTY_SUBSCRIPTION_KEY = "microsoft.api.subscription_key"
    PROPERTY_REGION = "microsoft.api.region"
    PROPERTY_CUSTOM_URL = "microsoft.api.url"
    DEFAULT_URL = "https://api.cognitive.microsofttranslator.com/translate"

    def __init__(self, preferences=None, credentials=None, transport=None):
        super().__init__(preferences=preferences, credentials=credentials, transport=transport)
        self.translator = AzureTranslatorV3(self)

    def get_preference_name(self) -> str:
        return self.ALLOW_MICROSOFT_TRANSLATE

    def set_key(self, key: str, temporary: bool) -> None:
        self.credentials.set_credential(self.PROPERTY_SUBSCRIPTION_KEY, key, temporary)

    def get_key(self) -> str:
        """
        Returns the subscription key.

        Raises:
            ConfigurationError: If no key is configured.
        """
        key = self.credentials.get_credential(self.PROPERTY_SUBSCRIPTION_KEY)
        if key is None:
            raise ConfigurationError("Azure Translator subscription key not found")
        return key

    def get_region(self) -> Optional[str]:
        region = self.preferences.get_preference_default(self.PROPERTY_REGION, "")
        return region.strip() or None

    def set_region(self, region: str) -> None:
        if region and region.strip():
            self.preferences.set_preference(self.PROPERTY_REGION, region.strip())
        else:
            self.preferences.remove_preference(self.PROPERTY_REGION)
        self.clear_cache()

    def get_endpoint_url(self) -> str:
        custom = self.preferences.get_preference_default(self.PROPERTY_CUSTOM_URL, "")
        return custom.strip() or self.DEFAULT_URL

    def translate(self, source_lang: str, target_lang: str, text: str) -> str:
        return self.translator.translate(source_lang, target_lang, text)

    def get_configuration(self) -> ConnectorSettings:
        return ConnectorSettings(
            endpoint_url=self.preferences.get_preference_default(self.PROPERTY_CUSTOM_URL, ""),
            endpoint_port="",
            credential=self.credentials.get_credential(self.PROPERTY_SUBSCRIPTION_KEY) or "",
            persist_credential=self.credentials.is_stored(self.PROPERTY_SUBSCRIPTION_KEY)
        )

    def apply_configuration(self, settings: ConnectorSettings) -> None:
        self._apply_credential(self.PROPERTY_SUBSCRIPTION_KEY, settings)
        url = settings.endpoint_url.strip()
        if url:
            self.preferences.set_preference(self.PROPERTY_CUSTOM_URL, url)
        else:
            self.preferences.remove_preference(self.PROPERTY_CUSTOM_URL)
        self.clear_cache()
        self.logger.info(f"Azure Translator configured (endpoint {self.get_endpoint_url()})")
