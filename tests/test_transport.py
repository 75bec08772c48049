"""Tests for the shared HTTP transport"""

import os
import sys
import pytest
from unittest.mock import Mock, patch
import requests

# Add src directory to Python path
sys.path.append(os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

from Plugins.MachineTranslation.BaseMachineTranslator.transport import HttpTransport
from Plugins.MachineTranslation.BaseMachineTranslator.errors import (
    ConfigurationError,
    TransportError,
)

URL = "http://mt.example.org:8000/translate"


@pytest.fixture
def transport():
    return HttpTransport()


def _response(status_code, text="", json_data=None):
    response = Mock()
    response.status_code = status_code
    response.text = text
    if json_data is None:
        response.json.side_effect = ValueError("No JSON")
    else:
        response.json.return_value = json_data
    return response


@patch("requests.request")
def test_post_returns_raw_body(mock_request, transport):
    mock_request.return_value = _response(200, text='{"tgt": "Hola"}')

    result = transport.post(URL, '{"src":"Hello"}', headers={"X-Test": "1"}, params={"a": "b"})

    assert result == '{"tgt": "Hola"}'
    mock_request.assert_called_once()
    assert mock_request.call_args[0][0] == "POST"
    assert mock_request.call_args[0][1] == URL
    kwargs = mock_request.call_args[1]
    assert kwargs["data"] == '{"src":"Hello"}'.encode("utf-8")
    assert kwargs["headers"]["Content-Type"].startswith("application/json")
    assert kwargs["headers"]["X-Test"] == "1"
    assert kwargs["params"] == {"a": "b"}


@patch("requests.request")
def test_post_sends_utf8_body(mock_request, transport):
    mock_request.return_value = _response(200, text="[]")

    transport.post(URL, '[{"text":"日本語"}]')

    assert mock_request.call_args[1]["data"] == '[{"text":"日本語"}]'.encode("utf-8")


@patch("requests.request")
def test_post_unencodable_body(mock_request, transport):
    with pytest.raises(TransportError, match="could not be encoded"):
        transport.post(URL, "[{\"text\":\"\ud800\"}]")

    mock_request.assert_not_called()


@patch("requests.request")
def test_post_passes_timeout(mock_request):
    mock_request.return_value = _response(200, text="{}")

    HttpTransport(timeout=5).post(URL, "{}")

    assert mock_request.call_args[1]["timeout"] == 5


@pytest.mark.parametrize("url", ["", "   ", None])
@patch("requests.request")
def test_post_empty_endpoint_is_configuration_error(mock_request, transport, url):
    with pytest.raises(ConfigurationError) as exc_info:
        transport.post(url, "{}")

    assert exc_info.value.kind == "configuration"
    mock_request.assert_not_called()


@patch("requests.request")
def test_post_unreachable_endpoint(mock_request, transport):
    mock_request.side_effect = requests.exceptions.ConnectionError("Connection refused")

    with pytest.raises(TransportError) as exc_info:
        transport.post(URL, "{}")

    assert exc_info.value.kind == "transport"
    assert exc_info.value.status_code is None
    assert isinstance(exc_info.value.__cause__, requests.exceptions.ConnectionError)
    assert "Connection refused" in str(exc_info.value)


@patch("requests.request")
def test_post_invalid_url(mock_request, transport):
    mock_request.side_effect = requests.exceptions.MissingSchema("Invalid URL ':/translate'")

    with pytest.raises(TransportError):
        transport.post(":/translate", "{}")


@patch("requests.request")
def test_post_error_status_includes_service_message(mock_request, transport):
    mock_request.return_value = _response(
        401, json_data={"error": {"code": 401000, "message": "Invalid subscription key"}}
    )

    with pytest.raises(TransportError) as exc_info:
        transport.post(URL, "{}")

    assert exc_info.value.status_code == 401
    assert "HTTP 401" in str(exc_info.value)
    assert "Invalid subscription key" in str(exc_info.value)


@patch("requests.request")
def test_post_error_status_with_plain_error_string(mock_request, transport):
    mock_request.return_value = _response(400, json_data={"error": "no model loaded"})

    with pytest.raises(TransportError) as exc_info:
        transport.post(URL, "{}")

    assert "no model loaded" in str(exc_info.value)


@patch("requests.request")
def test_post_error_status_without_json_body(mock_request, transport):
    mock_request.return_value = _response(503, text="<html>Service Unavailable</html>")

    with pytest.raises(TransportError) as exc_info:
        transport.post(URL, "{}")

    assert exc_info.value.status_code == 503
    assert str(exc_info.value) == "Translation service error (HTTP 503)"


@patch("requests.request")
def test_post_makes_single_attempt(mock_request, transport):
    mock_request.return_value = _response(429, json_data={"error": {"message": "Too many requests"}})

    with pytest.raises(TransportError):
        transport.post(URL, "{}")

    assert mock_request.call_count == 1
