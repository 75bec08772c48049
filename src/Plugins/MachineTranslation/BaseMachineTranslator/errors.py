"""
Exceptions raised by machine translation connectors.

Every error carries a ``kind`` so the host can tell a missing setting apart
from an unreachable service or an unexpected response.
"""

from typing import Optional


class MachineTranslationError(Exception):
    """Base class for connector failures."""

    kind = "translation"


class ConfigurationError(MachineTranslationError):
    """A required endpoint or credential is not configured."""

    kind = "configuration"


class TransportError(MachineTranslationError):
    """The service could not be reached or answered with a non-success status."""

    kind = "transport"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ParseError(MachineTranslationError):
    """The response body did not match the expected schema."""

    kind = "parse"
