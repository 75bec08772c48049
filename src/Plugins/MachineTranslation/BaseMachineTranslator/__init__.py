"""
BaseMachineTranslator package.

Contains the connector base class, the shared HTTP transport, the response
parser and the error types used by all machine translation connectors.
"""
from .BaseMachineTranslator import BaseMachineTranslator, ConnectorSettings
from .errors import MachineTranslationError, ConfigurationError, TransportError, ParseError
from .ResponseParser import ResponseParser
from .transport import HttpTransport

__all__ = [
    'BaseMachineTranslator',
    'ConnectorSettings',
    'MachineTranslationError',
    'ConfigurationError',
    'TransportError',
    'ParseError',
    'ResponseParser',
    'HttpTransport',
]
