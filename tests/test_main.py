"""Tests for the command line host"""

import os
import sys
import pytest
from unittest.mock import Mock, patch

# Add src directory to Python path
sys.path.append(os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

from main import run, load_config
from Preferences import Preferences
from Plugins.PluginManager import PluginManager


@pytest.fixture
def manager(tmp_path):
    return PluginManager(preferences=Preferences(str(tmp_path / "preferences.yaml")))


def test_list(manager, capsys):
    manager.get_plugin("Mtuoc").set_enabled(True)

    assert run(["list"], manager=manager) == 0

    out = capsys.readouterr().out
    assert "Mtuoc\tMTUOC\tenabled" in out
    assert "AzureTranslator\tAzure Translator\tdisabled" in out


def test_configure_mtuoc(manager, capsys):
    assert run(["configure", "Mtuoc", "--url", "http://localhost", "--port", "8000"], manager=manager) == 0

    assert manager.get_plugin("Mtuoc").get_translate_endpoint_url() == "http://localhost:8000/translate"
    assert "endpoint_port: 8000" in capsys.readouterr().out


def test_configure_azure_key_and_region(manager, capsys):
    assert run(["configure", "AzureTranslator", "--key", "k", "--temporary", "--region", "westeurope"],
               manager=manager) == 0

    azure = manager.get_plugin("AzureTranslator")
    assert azure.get_key() == "k"
    assert azure.get_region() == "westeurope"
    out = capsys.readouterr().out
    assert "credential: set" in out
    assert "persist_credential: False" in out


def test_configure_url_keeps_stored_key(manager):
    azure = manager.get_plugin("AzureTranslator")
    azure.credentials.set_credential(azure.PROPERTY_SUBSCRIPTION_KEY, "stored-key", temporary=False)
    azure.credentials.transient.set(azure.PROPERTY_SUBSCRIPTION_KEY, "env-session-key")

    assert run(["configure", "AzureTranslator", "--url", "https://proxy.example.org/translate"],
               manager=manager) == 0

    assert azure.credentials.retrieve(azure.PROPERTY_SUBSCRIPTION_KEY) == "stored-key"
    assert azure.get_endpoint_url() == "https://proxy.example.org/translate"


def test_invalid_preferences_file(tmp_path, capsys):
    preferences = tmp_path / "preferences.yaml"
    preferences.write_text("a: [unclosed\n")
    config = tmp_path / "config.yaml"
    config.write_text(
        f"settings:\n"
        f"  preferences_file: {preferences}\n"
        f"  log_file: {tmp_path / 'mt.log'}\n"
        f"  env_file: {tmp_path / '.env'}\n"
    )

    assert run(["--config", str(config), "list"]) == 1
    assert "Error loading preferences:" in capsys.readouterr().out


def test_enable_disable(manager):
    assert run(["enable", "AzureTranslator"], manager=manager) == 0
    assert manager.get_plugin("AzureTranslator").is_enabled()
    assert run(["disable", "AzureTranslator"], manager=manager) == 0
    assert not manager.get_plugin("AzureTranslator").is_enabled()


def test_unknown_connector(manager, capsys):
    assert run(["enable", "Nope"], manager=manager) == 1
    assert "Unknown connector 'Nope'" in capsys.readouterr().out


@patch("requests.request")
def test_translate_unconfigured(mock_request, manager, capsys):
    assert run(["translate", "Mtuoc", "--source", "en", "--target", "ca", "Hello"], manager=manager) == 1

    assert "configuration error:" in capsys.readouterr().out
    mock_request.assert_not_called()


@patch("requests.request")
def test_translate(mock_request, manager, capsys):
    response = Mock()
    response.status_code = 200
    response.text = '{"id":1,"src":"Hello","tgt":"Hola"}'
    mock_request.return_value = response
    run(["configure", "Mtuoc", "--url", "http://localhost", "--port", "8000"], manager=manager)
    capsys.readouterr()

    assert run(["translate", "Mtuoc", "--source", "en", "--target", "ca", "Hello"], manager=manager) == 0
    assert capsys.readouterr().out.strip() == "Hola"


def test_load_config(tmp_path):
    assert load_config(str(tmp_path / "missing.yaml")) == {}

    path = tmp_path / "config.yaml"
    path.write_text("settings:\n  log_level: DEBUG\nplugins:\n  disabled: [Mtuoc]\n")
    config = load_config(str(path))
    assert config["settings"]["log_level"] == "DEBUG"
    assert config["plugins"]["disabled"] == ["Mtuoc"]
