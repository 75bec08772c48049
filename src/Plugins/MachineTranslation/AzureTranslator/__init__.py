"""
AzureTranslator package.

Provides a connector for the Microsoft Azure Translator Text API v3.
"""
from .AzureTranslator import AzureTranslator

__all__ = ['AzureTranslator']
