"""
Synchronous HTTP client for the Poker Tracker backend API.

Uses ``httpx.Client`` (sync) because Streamlit scripts run synchronously.
"""

import logging

import httpx
import streamlit as st

logger = logging.getLogger(__name__)


class APIError(Exception):
    """User-friendly API error with categorized message.

    Categories: "connection", "timeout", "http", "network", "unknown".
    Used by the UI to display appropriate error messages.
    """

    def __init__(self, message: str, category: str = "unknown") -> None:
        self.message = message
        self.category = category
        super().__init__(message)


class APIClient:
    """Thin synchronous wrapper around httpx for calling the FastAPI backend.

    All methods return parsed JSON or raise ``APIError`` with user-friendly
    messages for display in the UI.
    """

    def __init__(self, base_url: str = "http://localhost:8000") -> None:
        """Initialize the HTTP client.

        Args:
            base_url: Base URL of the Poker Tracker FastAPI backend.
        """
        self._base_url = base_url.rstrip("/")
        self._client = httpx.Client(base_url=self._base_url, timeout=30.0)

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Execute an HTTP request with user-friendly error handling.

        Args:
            method: HTTP method name ("get", "post", "patch", "delete").
            path: API endpoint path (e.g. "/api/v1/transactions").
            **kwargs: Passed through to httpx (json, files, timeout, etc.).

        Returns:
            The httpx Response object with a successful status code.

        Raises:
            APIError: On connection, timeout, HTTP status, or network errors.
        """
        try:
            resp = getattr(self._client, method)(path, **kwargs)
            resp.raise_for_status()
            return resp
        except httpx.ConnectError:
            raise APIError(
                "Backend server is not running. "
                "Start it with: `uvicorn src.api.app:app --reload --port 8000`",
                category="connection",
            ) from None
        except httpx.TimeoutException:
            raise APIError(
                "Request timed out. The server may be overloaded.",
                category="timeout",
            ) from None
        except httpx.HTTPStatusError as exc:
            try:
                detail = exc.response.json().get("detail", exc.response.text)
            except Exception:
                detail = exc.response.text or str(exc)
            raise APIError(str(detail), category="http") from None
        except httpx.HTTPError as exc:
            raise APIError(f"Network error: {exc}", category="network") from None

    # -- health --

    def health_check(self) -> dict:
        return self._request("get", "/health").json()

    def check_connection(self) -> tuple[bool, str]:
        """Check if the backend is reachable. Returns (ok, message)."""
        try:
            self.health_check()
            return True, "Connected"
        except APIError as exc:
            return False, exc.message

    # -- transactions --

    def list_transactions(self) -> dict:
        """Return ``{"transactions": [...], "total": int}``, newest first."""
        return self._request("get", "/api/v1/transactions").json()

    def get_transaction(self, transaction_id: str) -> dict:
        return self._request("get", f"/api/v1/transactions/{transaction_id}").json()

    def create_transaction(self, amount: int, is_buy_in: bool) -> dict:
        body = {"amount": amount, "is_buy_in": is_buy_in}
        return self._request("post", "/api/v1/transactions", json=body).json()

    def update_notes(self, transaction_id: str, notes: str) -> dict:
        return self._request(
            "patch", f"/api/v1/transactions/{transaction_id}", json={"notes": notes}
        ).json()

    def delete_transactions(self, transaction_ids: list[str]) -> dict:
        return self._request(
            "post", "/api/v1/transactions/delete", json={"ids": transaction_ids}
        ).json()

    # -- voice notes --

    def transcribe(
        self,
        transaction_id: str,
        audio: bytes,
        filename: str = "voice-note.wav",
        content_type: str = "audio/wav",
    ) -> dict:
        """Upload a voice note; returns ``{"transaction": {...}, "text": str}``."""
        return self._request(
            "post",
            f"/api/v1/transactions/{transaction_id}/transcribe",
            files={"file": (filename, audio, content_type)},
            timeout=120.0,
        ).json()


@st.cache_resource
def get_api_client(base_url: str = "http://localhost:8000") -> APIClient:
    """Return a cached APIClient, keyed by base_url.

    Uses Streamlit's ``cache_resource`` to persist the client across reruns.
    When the base URL changes (e.g. user updates sidebar), a new client
    is created automatically because the cache key includes the parameter.
    """
    return APIClient(base_url=base_url)
