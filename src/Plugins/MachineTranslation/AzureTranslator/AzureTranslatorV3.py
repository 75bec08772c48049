"""
Azure Translator Text API v3 request/response handling.

The body is an array of text objects and the languages travel as query
parameters:

    POST {endpoint}?api-version=3.0&from=en&to=de
    [{"text":"Hello"}]

    [{"translations":[{"text":"Hallo","to":"de"}]}]
"""

import json
import logging
from typing import Any, Dict

from Plugins.MachineTranslation.BaseMachineTranslator.ResponseParser import ResponseParser

API_VERSION = "3.0"

AZURE_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "array",
    "minItems": 1,
    "items": {
        "type": "object",
        "properties": {
            "translations": {
                "type": "array",
                "minItems": 1,
                "items": {
                    "type": "object",
                    "properties": {
                        "text": {"type": "string"},
                        "to": {"type": "string"}
                    },
                    "required": ["text"]
                }
            }
        },
        "required": ["translations"]
    }
}


def to_azure_language(language: str) -> str:
    """Maps a language tag to the code Azure expects (Chinese needs a script subtag)."""
    tag = language.replace("_", "-")
    lower = tag.lower()
    if lower in ("zh", "zh-cn", "zh-sg", "zh-hans"):
        return "zh-Hans"
    if lower in ("zh-tw", "zh-hk", "zh-mo", "zh-hant"):
        return "zh-Hant"
    return tag


class AzureTranslatorV3:
    """Translator Text API v3 client used by the AzureTranslator plugin"""

    def __init__(self, azure):
        """
        Args:
            azure: The owning AzureTranslator plugin, which supplies the
                endpoint, key, region and transport.
        """
        self.azure = azure
        self.parser = ResponseParser("azure_translate_v3", AZURE_RESPONSE_SCHEMA,
                                     lambda doc: doc[0]["translations"][0]["text"])
        self.logger = logging.getLogger("Plugins.MachineTranslation.AzureTranslator")

    def create_json_request(self, text: str) -> str:
        """Serialize ``text`` as ``[{"text":"..."}]`` with standard JSON escaping."""
        return json.dumps([{"text": text}], ensure_ascii=False, separators=(",", ":"))

    def translate(self, source_lang: str, target_lang: str, text: str) -> str:
        headers = {"Ocp-Apim-Subscription-Key": self.azure.get_key()}
        region = self.azure.get_region()
        if region:
            headers["Ocp-Apim-Subscription-Region"] = region
        params = {
            "api-version": API_VERSION,
            "from": to_azure_language(source_lang),
            "to": to_azure_language(target_lang)
        }
        self.logger.debug(f"Translating {len(text)} chars {params['from']}->{params['to']}")
        body = self.azure.transport.post(
            self.azure.get_endpoint_url(),
            self.create_json_request(text),
            headers=headers,
            params=params
        )
        return self.parser.parse(body)
