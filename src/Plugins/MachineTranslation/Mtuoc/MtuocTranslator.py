"""
Request/response handling for the MTUOC translation server.

An MTUOC server serves a single language pair, so the body only carries the
segment and a request id:

    request:  {"id": 1, "src": "Hello"}
    response: {"id": 1, "src": "Hello", "tgt": "Hola"}
"""

import json
import itertools
import logging
from typing import Any, Dict

from Plugins.MachineTranslation.BaseMachineTranslator.errors import ConfigurationError
from Plugins.MachineTranslation.BaseMachineTranslator.ResponseParser import ResponseParser
from Plugins.MachineTranslation.BaseMachineTranslator.transport import HttpTransport

MTUOC_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "id": {},
        "src": {"type": "string"},
        "tgt": {"type": "string"}
    },
    "required": ["tgt"]
}


class MtuocTranslator:
    """Calls one MTUOC endpoint"""

    # Request ids are unique across translator instances
    _ids = itertools.count(1)

    def __init__(self, endpoint_url: str, transport: HttpTransport = None):
        self.endpoint_url = endpoint_url
        self.transport = transport if transport is not None else HttpTransport()
        self.parser = ResponseParser("mtuoc_translate", MTUOC_RESPONSE_SCHEMA, lambda doc: doc["tgt"])
        self.logger = logging.getLogger("Plugins.MachineTranslation.Mtuoc")

    def create_json_request(self, text: str) -> str:
        return json.dumps({"id": next(self._ids), "src": text}, ensure_ascii=False, separators=(",", ":"))

    def translate(self, source_lang: str, target_lang: str, text: str) -> str:
        if not self.endpoint_url:
            raise ConfigurationError("MTUOC engine URL and port are not configured")
        self.logger.debug(f"Translating {len(text)} chars {source_lang}->{target_lang} via {self.endpoint_url}")
        body = self.transport.post(self.endpoint_url, self.create_json_request(text))
        return self.parser.parse(body)
