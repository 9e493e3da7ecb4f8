"""Unit tests for the Streamlit-side APIClient.

Validates that requests hit the right endpoints with the right payloads and
that httpx failures become user-facing ``APIError`` messages.
"""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from src.ui.api_client import APIClient, APIError


@pytest.fixture
def client():
    """Create an APIClient with a mocked httpx.Client."""
    with patch("src.ui.api_client.httpx.Client") as mock_cls:
        mock_http = MagicMock()
        mock_cls.return_value = mock_http
        api = APIClient(base_url="http://test:8000")
        api._mock_http = mock_http  # expose for assertions
        yield api


def _ok(payload):
    resp = MagicMock()
    resp.json.return_value = payload
    return resp


class TestTransactions:
    def test_list(self, client):
        client._mock_http.get.return_value = _ok({"transactions": [], "total": 0})
        assert client.list_transactions() == {"transactions": [], "total": 0}
        client._mock_http.get.assert_called_once_with("/api/v1/transactions")

    def test_create_sends_magnitude_and_flag(self, client):
        client._mock_http.post.return_value = _ok({"id": "a", "amount": -50})
        client.create_transaction(amount=50, is_buy_in=True)
        client._mock_http.post.assert_called_once_with(
            "/api/v1/transactions", json={"amount": 50, "is_buy_in": True}
        )

    def test_update_notes(self, client):
        client._mock_http.patch.return_value = _ok({"id": "a", "notes": "n"})
        client.update_notes("a", "n")
        client._mock_http.patch.assert_called_once_with(
            "/api/v1/transactions/a", json={"notes": "n"}
        )

    def test_batch_delete(self, client):
        client._mock_http.post.return_value = _ok({"deleted": 2})
        assert client.delete_transactions(["a", "b"]) == {"deleted": 2}
        client._mock_http.post.assert_called_once_with(
            "/api/v1/transactions/delete", json={"ids": ["a", "b"]}
        )


class TestTranscribe:
    def test_uploads_audio_as_multipart(self, client):
        client._mock_http.post.return_value = _ok({"transaction": {"notes": "x"}, "text": "x"})
        client.transcribe("a", b"RIFF")
        args, kwargs = client._mock_http.post.call_args
        assert args == ("/api/v1/transactions/a/transcribe",)
        assert kwargs["files"] == {"file": ("voice-note.wav", b"RIFF", "audio/wav")}
        assert kwargs["timeout"] == 120.0


class TestErrors:
    def test_http_error_uses_detail(self, client):
        request = httpx.Request("POST", "http://test:8000/api/v1/transactions/a/transcribe")
        response = httpx.Response(502, json={"detail": "Invalid response"}, request=request)
        resp = MagicMock()
        resp.raise_for_status.side_effect = httpx.HTTPStatusError(
            "502", request=request, response=response
        )
        client._mock_http.post.return_value = resp

        with pytest.raises(APIError) as excinfo:
            client.transcribe("a", b"RIFF")
        assert excinfo.value.message == "Invalid response"
        assert excinfo.value.category == "http"

    def test_connection_error(self, client):
        client._mock_http.get.side_effect = httpx.ConnectError("refused")
        with pytest.raises(APIError) as excinfo:
            client.list_transactions()
        assert excinfo.value.category == "connection"

    def test_timeout(self, client):
        client._mock_http.get.side_effect = httpx.ReadTimeout("slow")
        with pytest.raises(APIError) as excinfo:
            client.list_transactions()
        assert excinfo.value.category == "timeout"

    def test_check_connection_reports_failure(self, client):
        client._mock_http.get.side_effect = httpx.ConnectError("refused")
        ok, message = client.check_connection()
        assert ok is False
        assert "not running" in message
