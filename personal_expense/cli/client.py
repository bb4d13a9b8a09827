from __future__ import annotations

import json
import shlex
from typing import Any

import httpx


class LedgerApiError(RuntimeError):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class LedgerApi:
    def __init__(
        self,
        base_url: str,
        timeout: float = 20.0,
        emit_curl: bool = False,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.emit_curl = emit_curl
        self._client = httpx.Client(base_url=self.base_url, timeout=self.timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "LedgerApi":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _curl(self, method: str, path: str, json_body: dict[str, Any] | None = None) -> str:
        parts = ["curl", "-X", method.upper()]
        if json_body is not None:
            parts.extend(["-H", "Content-Type: application/json", "-d", json.dumps(json_body, separators=(",", ":"))])
        parts.append(f"{self.base_url}{path}")
        return " ".join(shlex.quote(p) for p in parts)

    def _request(self, method: str, path: str, json_body: dict[str, Any] | None = None) -> Any:
        if self.emit_curl:
            print(self._curl(method, path, json_body=json_body))

        resp = self._client.request(method, path, json=json_body)
        try:
            payload = resp.json()
        except ValueError:
            payload = {}

        if resp.is_error:
            message = payload.get("message") or payload.get("error") or resp.reason_phrase
            raise LedgerApiError(resp.status_code, str(message))
        if not isinstance(payload, dict) or "data" not in payload:
            raise ValueError(f"Expected {{message, data}} object from {method} {path}")
        return payload["data"]

    def create_transaction(self, body: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", "/transactions", json_body=body)

    def list_transactions(self) -> list[dict[str, Any]]:
        return self._request("GET", "/transactions")

    def get_transaction(self, txn_id: int) -> dict[str, Any]:
        return self._request("GET", f"/transactions/{txn_id}")

    def update_transaction(self, txn_id: int, body: dict[str, Any]) -> dict[str, Any]:
        return self._request("PUT", f"/transactions/{txn_id}", json_body=body)

    def delete_transaction(self, txn_id: int) -> int:
        return int(self._request("DELETE", f"/transactions/{txn_id}")["id"])

    def summary(self) -> dict[str, int]:
        return self._request("GET", "/summary")

    def list_categories(self) -> list[dict[str, Any]]:
        return self._request("GET", "/categories")
