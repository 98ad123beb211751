from __future__ import annotations

"""urllib transport used to download collections.

HTTP error statuses are returned as regular responses so the caller decides
what a non-2xx answer means; only connection-level failures raise.
"""

import ssl
import urllib.error
import urllib.request
from typing import Callable, Optional

from privacy_sexy.core.interfaces.net import HTTPTransportProtocol
from privacy_sexy.core.models import FetchRequest, FetchResponse

SSLContextProvider = Callable[[str], Optional[ssl.SSLContext]]


class UrllibHTTPTransport(HTTPTransportProtocol):
    def __init__(self, *, user_agent: Optional[str] = None, ssl_ctx_provider: Optional[SSLContextProvider] = None) -> None:
        self._ua = user_agent
        self._ssl_ctx_for = ssl_ctx_provider or (lambda _url: None)

    def request(self, req: FetchRequest) -> FetchResponse:
        headers = dict(req.headers or {})
        if self._ua:
            headers.setdefault("User-Agent", self._ua)

        url_req = urllib.request.Request(req.url, data=req.body, headers=headers, method=req.method or "GET")
        timeout = 30.0 if req.timeout is None else float(req.timeout)

        try:
            with urllib.request.urlopen(url_req, timeout=timeout, context=self._ssl_ctx_for(req.url)) as resp:  # nosec B310
                return FetchResponse(
                    status=resp.status,
                    headers=dict(resp.headers.items()),
                    body=resp.read(),
                    final_url=resp.geturl(),
                )
        except urllib.error.HTTPError as exc:
            with exc:
                return FetchResponse(
                    status=exc.code,
                    headers=dict(exc.headers.items()) if exc.headers else {},
                    body=exc.read() or b"",
                    final_url=exc.geturl() or req.url,
                )
