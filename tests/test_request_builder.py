"""Tests for the JSON request bodies sent to the translation services"""

import os
import sys
import json
import pytest

# Add src directory to Python path
sys.path.append(os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

from Plugins.MachineTranslation.AzureTranslator.AzureTranslator import AzureTranslator
from Plugins.MachineTranslation.AzureTranslator.AzureTranslatorV3 import AzureTranslatorV3
from Plugins.MachineTranslation.Mtuoc.MtuocTranslator import MtuocTranslator


@pytest.fixture
def translator():
    """Azure v3 request builder backed by an in-memory plugin"""
    return AzureTranslatorV3(AzureTranslator())


def test_create_json_request_escapes_quotes(translator):
    result = translator.create_json_request("\"foo\" boo")
    assert result == "[{\"text\":\"\\\"foo\\\" boo\"}]"


def test_create_json_request_empty_string(translator):
    assert translator.create_json_request("") == '[{"text":""}]'


def test_create_json_request_escapes_newline(translator):
    result = translator.create_json_request("line one\nline two")
    assert result == '[{"text":"line one\\nline two"}]'
    assert "\n" not in result


def test_create_json_request_escapes_control_characters(translator):
    result = translator.create_json_request("a\x01b\tc")
    assert "\\u0001" in result
    assert "\\t" in result


def test_create_json_request_keeps_non_ascii(translator):
    result = translator.create_json_request("Größe 日本語")
    assert result == '[{"text":"Größe 日本語"}]'


@pytest.mark.parametrize("text", [
    "",
    "plain text",
    "  padded  ",
    "quote \" and back\\slash",
    "tab\tcarriage\rreturn\nnewline",
    "\x00\x1f\x7f",
    "slash / and <tag attr='1'>",
    "emoji 😀 and   separator",
    "{\"already\": \"json\"}",
])
def test_create_json_request_preserves_text(translator, text):
    decoded = json.loads(translator.create_json_request(text))
    assert isinstance(decoded, list)
    assert len(decoded) == 1
    assert decoded[0] == {"text": text}


def test_mtuoc_request_carries_segment_and_id():
    translator = MtuocTranslator("http://localhost:8000/translate")
    first = json.loads(translator.create_json_request("Hello \"world\""))
    second = json.loads(translator.create_json_request("Bye"))

    assert first["src"] == "Hello \"world\""
    assert second["src"] == "Bye"
    assert second["id"] > first["id"]
