"""Minimal HTTP client for reading and writing Vault KV secrets."""

from __future__ import annotations

import json
import os
from typing import Any, Mapping

import requests

DEFAULT_ADDRESS = "http://127.0.0.1:8200"
DEFAULT_TIMEOUT = 60.0


class VaultError(Exception):
    """Raised when a Vault request fails or returns unusable data."""


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _stringify(value: Any) -> str:
    """Render a decoded JSON value the way Vault tooling prints it."""
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return "[" + " ".join(_stringify(item) for item in value) + "]"
    if isinstance(value, dict):
        inner = " ".join(f"{key}:{_stringify(value[key])}" for key in sorted(value))
        return f"map[{inner}]"
    return str(value)


class VaultClient:
    """Talks to a Vault server over its HTTP API.

    The address falls back to ``VAULT_ADDR`` and then to the local default;
    the token to ``VAULT_TOKEN``; the namespace to ``VAULT_NAMESPACE``.
    """

    def __init__(
        self,
        address: str = "",
        token: str = "",
        namespace: str = "",
        *,
        environ: Mapping[str, str] | None = None,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        env = os.environ if environ is None else environ
        self.address = (address or env.get("VAULT_ADDR") or DEFAULT_ADDRESS).rstrip("/")
        self.token = token or env.get("VAULT_TOKEN", "")
        self.namespace = namespace or env.get("VAULT_NAMESPACE", "")
        self.timeout = timeout
        self._session = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.address}/v1/{path.lstrip('/')}"

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.token:
            headers["X-Vault-Token"] = self.token
        if self.namespace:
            headers["X-Vault-Namespace"] = self.namespace
        return headers

    def _request(self, method: str, path: str, payload: Mapping[str, Any] | None = None) -> Any:
        url = self._url(path)
        try:
            response = self._session.request(
                method,
                url,
                headers=self._headers(),
                json=dict(payload) if payload is not None else None,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise VaultError(f"{method} {url}: {exc}") from exc

        if response.status_code == 404 and method == "GET":
            return None
        if response.status_code >= 400:
            detail = ""
            try:
                errors = json.loads(response.content).get("errors")
                if errors:
                    detail = " Errors: " + "; ".join(str(err) for err in errors)
            except (ValueError, AttributeError):
                pass
            raise VaultError(
                f"Error making API request. URL: {method} {url} "
                f"Code: {response.status_code}.{detail}"
            )
        if not response.content.strip():
            return None
        try:
            # Numbers keep their literal text, as Vault's own client does.
            return json.loads(response.content, parse_int=str, parse_float=str)
        except ValueError as exc:
            raise VaultError(f"{method} {url}: invalid JSON response: {exc}") from exc

    def read_secrets(self, path: str) -> dict[str, str]:
        """Read the secret at ``path`` and return a flat key to string map.

        KV v2 responses are unwrapped; KV v1 data is used as is.
        """
        try:
            body = self._request("GET", path)
        except VaultError as exc:
            raise VaultError(f"reading path {_quote(path)}: {exc}") from exc
        if body is None:
            raise VaultError(f"no secret found at path {_quote(path)}")
        if not isinstance(body, dict):
            raise VaultError(f"unexpected data format at path {_quote(path)}")

        outer = body.get("data")
        if isinstance(outer, dict) and "data" in outer:
            data = outer["data"]
        else:
            data = outer if outer is not None else {}

        if not isinstance(data, dict):
            raise VaultError(f"unexpected data format at path {_quote(path)}")
        return {key: _stringify(value) for key, value in data.items()}

    def write(self, path: str, data: Mapping[str, Any]) -> dict[str, Any] | None:
        """Write ``data`` to ``path`` and return the decoded response, if any."""
        body = self._request("PUT", path, data)
        if body is None:
            return None
        if not isinstance(body, dict):
            raise VaultError(f"unexpected response format from path {_quote(path)}")
        return body