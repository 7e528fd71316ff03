from __future__ import annotations

import json
import logging
import os
import ssl
from dataclasses import dataclass
from typing import Any
from urllib import error, request

import certifi

logger = logging.getLogger(__name__)

HTTP_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"})


class ApiError(RuntimeError):
    """A remote call failed: bad status, transport failure or undecodable body."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        status_description: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.status_description = status_description


@dataclass(frozen=True)
class HttpResponse:
    status: int
    headers: dict[str, str]
    data: Any


def execute(
    uri: str,
    method: str = "GET",
    headers: dict[str, str] | None = None,
    body: Any = None,
    content_type: str = "application/json",
    timeout: float | None = None,
) -> HttpResponse:
    if not uri or not uri.strip():
        raise ValueError("uri must be a non-empty string")
    verb = method.strip().upper()
    if verb not in HTTP_METHODS:
        raise ValueError(f"Unsupported HTTP method: {method}")

    req_headers = dict(headers or {})
    payload = _encode_body(body)
    if payload is not None:
        req_headers["Content-Type"] = content_type

    req = request.Request(url=uri, headers=req_headers, data=payload, method=verb)
    context = _build_ssl_context()
    open_kwargs: dict[str, Any] = {"context": context}
    if timeout is not None:
        open_kwargs["timeout"] = timeout
    logger.debug("%s %s", verb, _redact(uri))
    try:
        with request.urlopen(req, **open_kwargs) as response:
            text = response.read().decode("utf-8")
            normalized_headers = {k.lower(): v for k, v in response.headers.items()}
            return HttpResponse(
                status=response.status,
                headers=normalized_headers,
                data=json.loads(text) if text.strip() else None,
            )
    except error.HTTPError as exc:
        raise _from_http_error(exc) from exc
    except error.URLError as exc:
        raise ApiError(str(exc)) from exc
    except (OSError, ValueError) as exc:
        # socket timeouts and undecodable 2xx bodies
        raise ApiError(str(exc)) from exc


def _encode_body(body: Any) -> bytes | None:
    if body is None:
        return None
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode("utf-8")
    return json.dumps(body).encode("utf-8")


def _from_http_error(exc: error.HTTPError) -> ApiError:
    status_code = exc.code
    status_description = str(exc.reason or "").strip()
    message = str(exc)

    detail = None
    try:
        text = exc.read().decode("utf-8", errors="replace")
        if text.strip():
            parsed = json.loads(text)
            if isinstance(parsed, dict) and parsed.get("body"):
                detail = str(parsed["body"])
    except (OSError, ValueError):
        detail = None

    return ApiError(
        f"HTTP {status_code} {status_description} - {detail or message}",
        status_code=status_code,
        status_description=status_description,
    )


def _redact(uri: str) -> str:
    base, sep, _ = uri.partition("?")
    return f"{base}{sep}..." if sep else base


def _build_ssl_context() -> ssl.SSLContext:
    if _env_true("PQLINT_INSECURE_SKIP_VERIFY"):
        return ssl._create_unverified_context()

    bundle = (
        os.getenv("PQLINT_CA_BUNDLE")
        or os.getenv("SSL_CERT_FILE")
        or os.getenv("REQUESTS_CA_BUNDLE")
    )
    if bundle:
        return ssl.create_default_context(cafile=bundle)

    return ssl.create_default_context(cafile=certifi.where())


def _env_true(name: str) -> bool:
    value = (os.getenv(name) or "").strip().lower()
    return value in {"1", "true", "yes", "on"}
