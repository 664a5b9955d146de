"""
HTTP transport, structured request logging, and security helpers for weeek-cli.
"""

from __future__ import annotations

import hashlib
import json
import re
import sys
import time
import urllib.parse
import uuid
from typing import Any

import httpx

from weeek_cli.config import VALID_METHODS, ClientConfig
from weeek_cli.exceptions import CliError, ConfigurationError, TransportError

_RETRYABLE_HTTP_CODES = frozenset({429, 502, 503, 504})
_SENSITIVE_QUERY_KEYS = {"token", "apikey", "api_key", "accesskey"}


# ---------------------------------------------------------------------------
# Security helpers
# ---------------------------------------------------------------------------


def _sanitize_error(body, max_len=500):
    """Truncate and clean error body for safe display."""
    if not body:
        return ""
    cleaned = re.sub(r"<[^>]+>", "", body)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    if len(cleaned) > max_len:
        return cleaned[:max_len] + "... [truncated]"
    return cleaned


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def _sanitize_url_for_log(url):
    """Mask sensitive query params in URLs before logging."""
    parsed = urllib.parse.urlsplit(url)
    if not parsed.query:
        return url
    pairs = urllib.parse.parse_qsl(parsed.query, keep_blank_values=True)
    masked = []
    for key, value in pairs:
        if key.lower() in _SENSITIVE_QUERY_KEYS:
            masked.append((key, "***"))
        else:
            masked.append((key, value))
    safe_query = urllib.parse.urlencode(masked, doseq=True)
    return urllib.parse.urlunsplit(
        (parsed.scheme, parsed.netloc, parsed.path, safe_query, parsed.fragment)
    )


def _log_http_event(cfg: ClientConfig, **fields):
    """Emit structured HTTP logs to stderr when enabled."""
    if not cfg.http_log_enabled:
        return
    print("[HTTP] " + json.dumps(fields, ensure_ascii=False, sort_keys=True), file=sys.stderr)


def _is_sampled_request(cfg: ClientConfig, request_id):
    """Decide if a request should be logged based on sample rate."""
    rate = cfg.http_log_sample_rate
    if rate <= 0:
        return False
    if rate >= 1:
        return True
    if not request_id:
        return False
    digest = hashlib.sha256(request_id.encode("utf-8")).digest()
    bucket = int.from_bytes(digest[:4], "big") / 4294967295.0
    return bucket < rate


def _error_envelope(message, status=None, request_id=None, retryable=None, detail=None):
    """Build a consistent CLI-safe HTTP error message."""
    meta = []
    if status is not None:
        meta.append(f"status={status}")
    if request_id:
        meta.append(f"request_id={request_id}")
    if retryable is not None:
        meta.append(f"retryable={'yes' if retryable else 'no'}")
    suffix = f" ({', '.join(meta)})" if meta else ""
    body = f"[ERROR] {message}{suffix}"
    if detail:
        body += f"\n{detail}"
    return body


def describe_transport_error(err: TransportError) -> str:
    """Human-readable summary of a TransportError for CLI output."""
    return _error_envelope(
        f"HTTP {err.status}: {err.reason}",
        status=err.status,
        request_id=err.headers.get("X-Request-Id") if err.headers else None,
        retryable=err.status in _RETRYABLE_HTTP_CODES,
        detail=_sanitize_error(err.body),
    )


# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------


def _normalize_path(path):
    path = (path or "").strip()
    return path if path.startswith("/") else f"/{path}"


def _clean_params(params):
    """Drop None values; render bools the way the API expects them."""
    if not params:
        return None
    clean = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        clean[key] = value
    return clean or None


class WeeekTransport:
    """Bearer-authenticated async HTTP client for the WEEEK public API.

    Uses httpx.AsyncClient so concurrent requests share one connection pool.
    """

    def __init__(self, cfg: ClientConfig, *, http_client: httpx.AsyncClient | None = None):
        if not cfg.api_key:
            raise ConfigurationError(
                "[SETUP_NEEDED] WEEEK_API_KEY is required. "
                "Set it in the environment or in a .env file."
            )
        self.config = cfg
        self._owns_client = http_client is None
        self._http = (
            http_client
            if http_client is not None
            else httpx.AsyncClient(timeout=float(cfg.timeout_seconds))
        )

    async def aclose(self):
        if self._owns_client:
            await self._http.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.aclose()

    def _headers(self, request_id, json_body=True):
        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Accept": "application/json",
            "X-Request-Id": request_id,
        }
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: dict | None = None,
        *,
        files: dict | None = None,
    ) -> Any:
        """Issue one request. Returns parsed JSON, or text for non-JSON responses.

        Raises TransportError for non-success status codes and CliError for
        network, timeout, size and parse failures.
        """
        method = (method or "").upper()
        if method not in VALID_METHODS:
            raise CliError(
                f"[ERROR] Invalid HTTP method '{method}'. "
                f"Valid: {', '.join(sorted(VALID_METHODS))}"
            )
        cfg = self.config
        url = cfg.api_url + _normalize_path(path)
        query = _clean_params(params)
        request_id = str(uuid.uuid4())
        sampled = _is_sampled_request(cfg, request_id)
        safe_url = _sanitize_url_for_log(
            url + ("?" + urllib.parse.urlencode(query) if query else "")
        )
        kwargs: dict[str, Any] = {
            "params": query,
            "headers": self._headers(request_id, json_body=files is None),
        }
        if files is not None:
            kwargs["files"] = files
        elif body is not None:
            kwargs["json"] = body

        if sampled:
            _log_http_event(
                cfg,
                phase="request",
                method=method,
                url=safe_url,
                request_id=request_id,
                timeout_seconds=cfg.timeout_seconds,
            )
        start = time.perf_counter()
        try:
            resp = await self._http.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            if sampled:
                _log_http_event(
                    cfg,
                    phase="network_error",
                    method=method,
                    url=safe_url,
                    error="timeout",
                    request_id=request_id,
                )
            raise CliError(
                _error_envelope(
                    f"Request timed out after {cfg.timeout_seconds} seconds. "
                    "Is the WEEEK API reachable?",
                    request_id=request_id,
                    retryable=False,
                )
            ) from e
        except httpx.RequestError as e:
            if sampled:
                _log_http_event(
                    cfg,
                    phase="network_error",
                    method=method,
                    url=safe_url,
                    error=f"request_error: {e}",
                    request_id=request_id,
                )
            raise CliError(
                _error_envelope(f"Connection failed: {e}", request_id=request_id, retryable=False)
            ) from e

        raw = resp.content
        content_type = resp.headers.get("Content-Type", "")
        if sampled:
            _log_http_event(
                cfg,
                phase="response",
                method=method,
                url=safe_url,
                status=resp.status_code,
                content_type=content_type,
                bytes=len(raw),
                latency_ms=round((time.perf_counter() - start) * 1000, 2),
                request_id=request_id,
            )
        if len(raw) > cfg.max_response_bytes:
            raise CliError(
                f"[ERROR] Response too large from WEEEK API (>{cfg.max_response_bytes} bytes)."
            )
        if not resp.is_success:
            raise TransportError(
                resp.status_code,
                resp.reason_phrase,
                raw.decode("utf-8", errors="replace"),
                headers=dict(resp.headers),
            )
        if "json" in content_type.lower():
            if not raw.strip():
                return {}
            try:
                return json.loads(raw.decode("utf-8"))
            except (json.JSONDecodeError, UnicodeDecodeError):
                raise CliError(
                    "[ERROR] Unexpected response from WEEEK API (not valid JSON)."
                ) from None
        return raw.decode("utf-8", errors="replace")
