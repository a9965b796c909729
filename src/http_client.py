# http_client.py
from __future__ import annotations
import sys, uuid
from typing import Optional
import httpx

class HttpClient:
    """
    - Reusable async HTTP client with:
      - base_url (absolute URLs bypass it, e.g. the image CDN)
      - httpx timeouts
      - X-Request-Id tagging
      - non-2xx fail fast
    """

    def __init__(
        self,
        base_url: str,
        connect_timeout: float,
        read_timeout: float,
        *,
        default_headers: Optional[dict[str, str]] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = httpx.Timeout(
            connect=connect_timeout,
            read=read_timeout,
            write=read_timeout,
            pool=read_timeout,
        )
        self.default_headers = {"Accept": "application/json", **(default_headers or {})}
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, headers=self.default_headers)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if self._client is not None:
            await self._client.aclose()

    def _url_for_logs(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return self.base_url + path

    async def request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """
        Single-shot request; raises httpx.HTTPStatusError on any non-2xx
        and lets network errors (httpx.HTTPError) propagate.
        Each request tagged with X-Request-Id for traceability.
        """
        assert self._client is not None

        req_id = kwargs.pop("req_id", str(uuid.uuid4()))
        headers = kwargs.pop("headers", {})
        headers.setdefault("X-Request-Id", req_id)
        kwargs["headers"] = headers

        url = self._url_for_logs(path)

        try:
            resp = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            print(f"[req#{req_id}] [fatal] {method} {url}: network: {e}", file=sys.stderr)
            raise

        status = resp.status_code
        if not (200 <= status < 300):
            print(f"[req#{req_id}] [fatal] {method} {url} returned {status}", file=sys.stderr)
            raise httpx.HTTPStatusError(f"HTTP {status} for {method} {url}", request=resp.request, response=resp)
        return resp
