from __future__ import annotations

import logging
from typing import Any

import httpx

from .config_types import ClientConfig
from .errors import AuthError, NetworkError, TransportError
from .request_spec import Body, RawBody, RequestSpec

CLIENT_VERSION = "0.1.0"

logger = logging.getLogger(__name__)


class Transport:
    def __init__(self, cfg: ClientConfig, *, transport: httpx.BaseTransport | None = None):
        self._cfg = cfg
        options: dict[str, Any] = {}
        if cfg.timeout_s is not None:
            options["timeout"] = cfg.timeout_s
        if transport is not None:
            options["transport"] = transport

        self._client = httpx.Client(
            base_url=cfg.address.rstrip("/"),
            headers={"User-Agent": f"hydrus-client/{CLIENT_VERSION}"},
            follow_redirects=True,
            **options,
        )

    def close(self) -> None:
        self._client.close()

    def request(
            self,
            method: str,
            path: str,
            *,
            headers: dict[str, str] | None = None,
            queries: dict[str, Any] | None = None,
            body: Body | None = None,
            expect_json: bool = True,
    ) -> Any:
        spec = RequestSpec(
            method=method,
            path=path,
            query_params=dict(queries or {}),
            headers=dict(headers or {}),
            body=body,
        )
        return self.send(spec, expect_json=expect_json)

    def send(self, spec: RequestSpec, *, expect_json: bool = True) -> Any:
        url = spec.url_path()
        kwargs: dict[str, Any] = {"headers": spec.build_headers(self._cfg.key)}
        if spec.body is not None:
            if isinstance(spec.body, RawBody):
                kwargs["content"] = spec.body.content
            else:
                kwargs["json"] = spec.body.value

        logger.debug("%s %s", spec.method, url)
        try:
            r = self._client.request(spec.method, url, **kwargs)
        except httpx.RequestError as e:
            raise NetworkError(f"{spec.method} {spec.path} failed: {e}") from e

        if not r.is_success:
            reason = r.reason_phrase or f"HTTP {r.status_code}"
            details = r.text[:1000] if r.content else None
            logger.debug("%s %s -> %s %s", spec.method, spec.path, r.status_code, reason)
            if r.status_code in (401, 403):
                raise AuthError(r.status_code, reason, details)
            raise TransportError(r.status_code, reason, details)

        if not expect_json:
            return r.content
        if not r.content:
            return None
        try:
            return r.json()
        except ValueError as e:
            raise TransportError(r.status_code, "invalid JSON response", r.text[:1000]) from e
