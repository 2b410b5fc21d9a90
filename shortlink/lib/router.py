"""Verb + path dispatch onto the link service.

Adapters (FastAPI, API Gateway) normalize their request into a
``(method, path, body)`` triple and render the returned RouterResponse.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Union
from urllib.parse import quote

from .service import LinkService
from .common.url_builder import last_path_segment
from .errors import ShortLinkError, ValidationError, MethodNotAllowedError

CUSTOM_PATH = "createcustom"

# Reserved and unreserved URI characters plus "%", so existing escapes survive
LOCATION_SAFE = ":/?#[]@!$&'()*+,;=%~"


@dataclass
class RouterResponse:
    """Transport-neutral HTTP response."""

    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: str = ""


class RequestRouter:
    """Map HTTP verbs and paths to LinkService operations."""

    def __init__(
        self,
        service: LinkService,
        cors_allow_origin: str = "*",
        logger: Optional[logging.Logger] = None,
    ):
        self.service = service
        self.cors_allow_origin = cors_allow_origin
        self.logger = logger or logging.getLogger(__name__)

    def _cors_headers(self) -> Dict[str, str]:
        return {
            "Access-Control-Allow-Origin": self.cors_allow_origin,
            "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
            "Access-Control-Allow-Headers": "Content-Type",
        }

    def _json(self, status_code: int, payload: dict) -> RouterResponse:
        headers = self._cors_headers()
        headers["Content-Type"] = "application/json"
        return RouterResponse(status_code, headers, json.dumps(payload))

    def _error(self, status_code: int, message: str) -> RouterResponse:
        return self._json(status_code, {"error": message})

    @staticmethod
    def _parse_body(body: Union[str, bytes, None]) -> dict:
        if isinstance(body, bytes):
            try:
                body = body.decode("utf-8")
            except UnicodeDecodeError:
                raise ValidationError("Request body must be valid UTF-8") from None
        if not body:
            raise ValidationError("Request body is required")
        try:
            payload = json.loads(body)
        except json.JSONDecodeError:
            raise ValidationError("Request body must be valid JSON") from None
        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object")
        return payload

    async def dispatch(
        self,
        method: Optional[str],
        path: str,
        body: Union[str, bytes, None] = None,
    ) -> RouterResponse:
        """Dispatch one request.

        Args:
            method: HTTP verb
            path: Request path relative to the service root
            body: Raw request body

        Returns:
            RouterResponse ready to be rendered by the adapter
        """
        method = (method or "").upper()
        if not method:
            self.logger.warning("Rejected request with no HTTP method")
            return self._error(400, "HTTP Method is missing")

        try:
            if method == "OPTIONS":
                return RouterResponse(200, self._cors_headers(), "")
            if method == "POST":
                return await self._create(path, body)
            if method == "GET":
                return await self._resolve(path)
            raise MethodNotAllowedError("Method Not Allowed")
        except ShortLinkError as e:
            if e.status_code >= 500:
                self.logger.error(f"{method} {path} failed: {e.message}")
            return self._error(e.status_code, e.message)
        except Exception:
            self.logger.exception(f"Unhandled error for {method} {path}")
            return self._error(500, "Internal server error")

    async def _create(self, path: str, body) -> RouterResponse:
        payload = self._parse_body(body)
        url = payload.get("url")
        if last_path_segment(path) == CUSTOM_PATH:
            short_url = await self.service.create_custom_short_link(url, payload.get("code"))
        else:
            short_url = await self.service.create_short_link(url)
        return self._json(200, {"short_url": short_url})

    async def _resolve(self, path: str) -> RouterResponse:
        long_url = await self.service.resolve_short_link(last_path_segment(path))
        headers = self._cors_headers()
        headers["Location"] = quote(long_url, safe=LOCATION_SAFE)
        return RouterResponse(301, headers, "")
