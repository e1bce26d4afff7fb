"""
Auxiliary REST helper for the node's non-RPC endpoints.

Responses use a small envelope:

    {"success": true,  "data": {...}}
    {"success": false, "error": {"code": "...", "message": "...", "data": ...}}

HTTP >= 400 bodies are parsed as an error object when possible.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from ..config import ClientConfig
from ..context import Context, ensure_context
from ..errors import APIError, TransportError
from .http import decode_result, json_default

log = logging.getLogger(__name__)


class APIErrorBody(BaseModel):
    model_config = ConfigDict(frozen=True)
    code: str
    message: str
    data: Optional[Any] = None

    def to_error(self) -> APIError:
        return APIError(code=self.code, message=self.message, data=self.data)


class APIResponse(BaseModel):
    model_config = ConfigDict(frozen=True)
    data: Optional[Any] = None
    success: bool
    error: Optional[APIErrorBody] = None


class RestClient:
    """
    Thin REST helper sharing the facade's HTTP pool and auth headers.
    """

    def __init__(self, config: ClientConfig, *, client: Optional[httpx.Client] = None) -> None:
        self._config = config
        self._headers: Dict[str, str] = config.http_headers(accept=True)
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=config.timeout)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        *,
        result_type: Any = None,
        ctx: Optional[Context] = None,
    ) -> Any:
        """
        Perform `method path` against the configured endpoint and return the
        envelope's `data` (validated against `result_type` when given).
        """
        ctx = ensure_context(ctx)
        ctx.check()

        content: Optional[bytes] = None
        if body is not None:
            try:
                content = json.dumps(body, separators=(",", ":"), default=json_default).encode("utf-8")
            except (TypeError, ValueError) as e:
                raise TransportError("marshal", "failed to marshal request body", method=path, detail=str(e)) from e

        url = self._config.endpoint + "/" + path.lstrip("/")
        timeout = self._config.timeout
        rem = ctx.remaining()
        if rem is not None:
            timeout = max(min(timeout, rem), 0.001)

        log.debug("rest -> %s %s", method.upper(), url)
        try:
            resp = self._client.request(method.upper(), url, content=content, headers=self._headers, timeout=timeout)
        except httpx.TimeoutException as e:
            ctx.check()
            raise TransportError("send", "request timed out", method=path, detail=str(e)) from e
        except httpx.HTTPError as e:
            raise TransportError("send", "request failed", method=path, detail=str(e)) from e

        return self._handle_response(resp, path, result_type)

    def _handle_response(self, resp: httpx.Response, path: str, result_type: Any) -> Any:
        if resp.status_code >= 400:
            try:
                err = APIErrorBody.model_validate_json(resp.content)
            except ValidationError:
                raise TransportError(
                    "send", f"HTTP {resp.status_code}", method=path,
                    http_status=resp.status_code, detail=resp.text[:256],
                ) from None
            raise err.to_error()

        try:
            envelope = APIResponse.model_validate_json(resp.content)
        except ValidationError as e:
            raise TransportError(
                "decode", "failed to unmarshal response", method=path,
                http_status=resp.status_code, detail=str(e),
            ) from e

        if not envelope.success:
            if envelope.error is not None:
                raise envelope.error.to_error()
            raise APIError(code="unknown", message="API request failed")

        return decode_result(envelope.data, result_type, method=path)


__all__ = ["RestClient", "APIResponse", "APIErrorBody"]
