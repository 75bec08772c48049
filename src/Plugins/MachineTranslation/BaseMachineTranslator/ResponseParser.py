"""
ResponseParser module.

Validates translation service responses against a JSON schema before the
translated text is extracted from them.
"""

import json
import logging
from typing import Any, Callable, Dict

from jsonschema import Draft7Validator, ValidationError

from .errors import ParseError


class ResponseParser:
    """
    Turns a raw response body into a single translated string.

    Attributes:
        schema_id: Name used in log and error messages.
        validator: A jsonschema validator built from the response schema.
    """

    def __init__(self, schema_id: str, schema: Dict[str, Any], extract: Callable[[Any], str]):
        """
        Args:
            schema_id: Name of the response schema (e.g. "azure_translate_v3").
            schema: JSON schema the decoded body must satisfy.
            extract: Picks the translated text out of a validated document.
        """
        if not schema_id:
            raise ValueError("Schema ID cannot be empty.")
        if not isinstance(schema, dict):
            raise ValueError("Schema must be a dictionary.")
        Draft7Validator.check_schema(schema)
        self.schema_id = schema_id
        self.validator = Draft7Validator(schema)
        self._extract = extract
        self.logger = logging.getLogger(__name__)

    def parse(self, body: str) -> str:
        """
        Decodes and validates ``body`` and returns the translated text.

        Raises:
            ParseError: If the body is not JSON or does not match the schema.
        """
        try:
            document = json.loads(body)
        except (TypeError, ValueError) as e:
            self.logger.error(f"Response for '{self.schema_id}' is not valid JSON: {e}")
            raise ParseError(f"Malformed JSON in translation response: {e}") from e

        try:
            self.validator.validate(document)
        except ValidationError as e:
            self.logger.error(f"Response validation failed against schema '{self.schema_id}': {e.message}")
            if e.path:
                self.logger.error(f"Validation path: {list(e.path)}")
            raise ParseError(f"Unexpected translation response: {e.message}") from e

        return self._extract(document)
