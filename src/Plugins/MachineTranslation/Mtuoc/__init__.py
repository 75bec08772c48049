"""
Mtuoc package.

Provides a connector for self-hosted MTUOC translation servers.
"""
from .Mtuoc import Mtuoc

__all__ = ['Mtuoc']
