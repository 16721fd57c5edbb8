"""
REST transport for the coaching center backend.

JSON over HTTP, one resource path per entity kind:
    GET    /<resource>          -> bare array
    GET    /<resource>/<id>     -> bare record
    POST   /<resource>          -> created record
    PUT    /<resource>/<id>     -> updated record
    DELETE /<resource>/<id>     -> {"message": ..., "<entity>": record}
    GET    /health              -> liveness payload

Errors come back as {"error": <message or validation detail>} with 400/404/500.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from coachdesk.config import AppConfig
from coachdesk.errors import NotFoundError, TransportError, UnhandledError, ValidationError

logger = logging.getLogger(__name__)


def _error_message(detail: Any) -> str:
    # validation errors arrive as a list of issues rather than a string
    if isinstance(detail, list):
        parts = []
        for issue in detail:
            if isinstance(issue, dict):
                path = ".".join(str(p) for p in issue.get("path", []))
                msg = issue.get("message", str(issue))
                parts.append(f"{path}: {msg}" if path else msg)
            else:
                parts.append(str(issue))
        return "; ".join(parts)
    return str(detail)


class ApiClient:
    """Thin wrapper over `requests` that turns HTTP failures into CoachDeskError subclasses."""

    def __init__(self, cfg: AppConfig):
        self.cfg = cfg
        self._base_url = cfg.api_base_url.rstrip("/")
        self._headers = {"Content-Type": "application/json"}

    def request(self, method: str, path: str, json: Optional[dict] = None, timeout: Optional[float] = None) -> Any:
        url = f"{self._base_url}{path}"
        try:
            resp = requests.request(
                method,
                url,
                json=json,
                headers=self._headers,
                timeout=timeout or self.cfg.api_timeout_seconds,
            )
        except requests.RequestException as e:
            raise TransportError(f"{method} {path} failed: {type(e).__name__}") from e

        if resp.status_code < 300:
            try:
                return resp.json()
            except ValueError as e:
                raise TransportError(f"{method} {path} returned a non-JSON body") from e

        try:
            body = resp.json()
        except ValueError:
            body = None
        detail = body.get("error") if isinstance(body, dict) else None

        logger.debug("%s %s -> %s %s", method, path, resp.status_code, detail)
        if detail is None:
            raise TransportError(f"HTTP error! status: {resp.status_code}")
        message = _error_message(detail)
        if resp.status_code == 400:
            raise ValidationError(message)
        if resp.status_code == 404:
            raise NotFoundError(message)
        raise UnhandledError(message)

    # --- health ---

    def health(self) -> bool:
        try:
            self.request("GET", "/health", timeout=self.cfg.health_timeout_seconds)
            return True
        except Exception as e:  # noqa: BLE001 - any failure means "not connected"
            logger.info("Health probe failed: %s", e)
            return False

    # --- resources ---

    def list(self, resource: str) -> list[dict]:
        data = self.request("GET", f"/{resource}")
        if not isinstance(data, list):
            raise TransportError(f"GET /{resource} did not return an array")
        return data

    def get(self, resource: str, record_id: str) -> dict:
        return self.request("GET", f"/{resource}/{record_id}")

    def create(self, resource: str, payload: dict) -> dict:
        return self.request("POST", f"/{resource}", json=payload)

    def update(self, resource: str, record_id: str, payload: dict) -> dict:
        return self.request("PUT", f"/{resource}/{record_id}", json=payload)

    def delete(self, resource: str, record_id: str) -> dict:
        return self.request("DELETE", f"/{resource}/{record_id}")


def get_api_client(cfg: AppConfig) -> ApiClient:
    return ApiClient(cfg)
