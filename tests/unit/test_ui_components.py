"""Tests for the UI-side list and detail logic (no Streamlit runtime needed)."""

from unittest.mock import MagicMock

import pytest

from src.ui.api_client import APIClient, APIError
from src.ui.components.transaction_detail import run_transcription
from src.ui.components.transaction_list import delete_at, submit_amount


@pytest.fixture
def client():
    return MagicMock(spec=APIClient)


class TestSubmitAmount:
    def test_buy_in_posts_magnitude(self, client):
        assert submit_amount(client, "50", is_buy_in=True) == ""
        client.create_transaction.assert_called_once_with(amount=50, is_buy_in=True)

    def test_exit_posts_magnitude(self, client):
        assert submit_amount(client, "50", is_buy_in=False) == ""
        client.create_transaction.assert_called_once_with(amount=50, is_buy_in=False)

    def test_negative_input_uses_absolute_value(self, client):
        submit_amount(client, "-30", is_buy_in=False)
        client.create_transaction.assert_called_once_with(amount=30, is_buy_in=False)

    @pytest.mark.parametrize("text", ["abc", "", "12.5"])
    def test_invalid_input_is_silent_noop(self, client, text):
        """No request is made and the field keeps what was typed."""
        assert submit_amount(client, text, is_buy_in=True) == text
        client.create_transaction.assert_not_called()

    def test_api_error_keeps_input(self, client):
        client.create_transaction.side_effect = APIError("down", "connection")
        with pytest.raises(APIError):
            submit_amount(client, "50", is_buy_in=True)


class TestDeleteAt:
    ROWS = [{"id": "c", "amount": 5}, {"id": "b", "amount": -2}, {"id": "a", "amount": 1}]

    def test_maps_indices_to_ids(self, client):
        client.delete_transactions.return_value = {"deleted": 2}
        assert delete_at(client, self.ROWS, [2, 0]) == 2
        client.delete_transactions.assert_called_once_with(["c", "a"])

    def test_ignores_out_of_range(self, client):
        client.delete_transactions.return_value = {"deleted": 1}
        delete_at(client, self.ROWS, [1, 7, -1])
        client.delete_transactions.assert_called_once_with(["b"])

    def test_empty_selection(self, client):
        assert delete_at(client, self.ROWS, []) == 0
        client.delete_transactions.assert_not_called()


class TestRunTranscription:
    def test_success_returns_notes(self, client):
        client.transcribe.return_value = {
            "transaction": {"id": "a", "notes": "old\nnew"},
            "text": "new",
        }
        assert run_transcription(client, "a", b"RIFF") == ("old\nnew", None)

    def test_failure_returns_message(self, client):
        client.transcribe.side_effect = APIError("Invalid response", "http")
        assert run_transcription(client, "a", b"RIFF") == (None, "Invalid response")
