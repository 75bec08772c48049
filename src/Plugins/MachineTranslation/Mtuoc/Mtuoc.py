"""
MTUOC plugin for a self-hosted MTUOC translation server.

The server address is built from two host preferences, the engine URL and
port, as "<url>:<port>/translate". If either is missing the endpoint is empty
and translation fails with a ConfigurationError before any request is made.
"""

from Plugins.MachineTranslation.BaseMachineTranslator.BaseMachineTranslator import (
    BaseMachineTranslator,
    ConnectorSettings,
)
from .MtuocTranslator import MtuocTranslator


class Mtuoc(BaseMachineTranslator):
    """Connector for the MTUOC server"""

    plugin_type = "MachineTranslation"
    required_host_version = "1.0.0"
    name = "MTUOC"

    ALLOW_MTUOC = "allow_mtuoc"
    PROPERTY_MT_ENGINE_URL = "mtuoc.engine_url"
    PROPERTY_MT_ENGINE_PORT = "mtuoc.engine_port"
    # Stored from the dialog but not sent by the server protocol yet
    PROPERTY_API_KEY = "mtuoc.apikey"

    def get_preference_name(self) -> str:
        return self.ALLOW_MTUOC

    def get_translate_endpoint_url(self) -> str:
        """
        Returns "<url>:<port>/translate", or "" when url or port is unset.
        """
        url = self.preferences.get_preference_default(self.PROPERTY_MT_ENGINE_URL, None)
        port = self.preferences.get_preference_default(self.PROPERTY_MT_ENGINE_PORT, None)
        if url is None or port is None or not url.strip() or not port.strip():
            return ""
        return f"{url}:{port}/translate"

    def translate(self, source_lang: str, target_lang: str, text: str) -> str:
        translator = MtuocTranslator(self.get_translate_endpoint_url(), transport=self.transport)
        return translator.translate(source_lang, target_lang, text)

    def get_configuration(self) -> ConnectorSettings:
        return ConnectorSettings(
            endpoint_url=self.preferences.get_preference_default(self.PROPERTY_MT_ENGINE_URL, ""),
            endpoint_port=self.preferences.get_preference_default(self.PROPERTY_MT_ENGINE_PORT, ""),
            credential=self.credentials.get_credential(self.PROPERTY_API_KEY) or "",
            persist_credential=self.credentials.is_stored(self.PROPERTY_API_KEY)
        )

    def apply_configuration(self, settings: ConnectorSettings) -> None:
        self.preferences.set_preference(self.PROPERTY_MT_ENGINE_URL, settings.endpoint_url.strip())
        self.preferences.set_preference(self.PROPERTY_MT_ENGINE_PORT, settings.endpoint_port.strip())
        self._apply_credential(self.PROPERTY_API_KEY, settings)
        self.clear_cache()
        self.logger.info(f"MTUOC endpoint set to '{self.get_translate_endpoint_url()}'")
