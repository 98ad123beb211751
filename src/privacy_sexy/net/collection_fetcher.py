from __future__ import annotations
"""
Remote collections.

Downloads a collection document over HTTP(S) and hands the text to the
regular loader. Transport failures and non-2xx answers surface as
CollectionTransportError; a body that is not a valid collection surfaces as
CollectionFormatError, exactly like a local file would.
"""
import logging
import urllib.error
from typing import Optional

from privacy_sexy import __version__
from privacy_sexy.constants import COLLECTIONS_URL
from privacy_sexy.core.errors import CollectionTransportError
from privacy_sexy.core.interfaces.net import CollectionFetcherProtocol, HTTPTransportProtocol
from privacy_sexy.core.models import OS, Collection, FetchRequest
from privacy_sexy.io.collection_loader import CollectionLoader
from privacy_sexy.logging.helpers import get_logger
from privacy_sexy.net.urllib_transport import UrllibHTTPTransport


class CollectionFetcher(CollectionFetcherProtocol):
    def __init__(
        self,
        *,
        logger: Optional[logging.Logger] = None,
        user_agent: str = f'privacy-sexy/{__version__}',
        transport: Optional[HTTPTransportProtocol] = None,
        loader: Optional[CollectionLoader] = None,
        timeout: float = 30.0,
    ) -> None:
        self._log = logger or get_logger('net.fetcher')
        self._ua = user_agent
        self._http: HTTPTransportProtocol = transport or UrllibHTTPTransport(user_agent=self._ua)
        self._loader = loader or CollectionLoader(logger=self._log)
        self._timeout = timeout

    def fetch(self, url: str) -> Collection:
        try:
            resp = self._http.request(
                FetchRequest(method='GET', url=url, headers={'User-Agent': self._ua}, timeout=self._timeout)
            )
        except (urllib.error.URLError, OSError, ValueError) as exc:
            raise CollectionTransportError(f'could not fetch {url}: {exc}') from exc

        if not 200 <= resp.status < 300:
            raise CollectionTransportError(f'could not fetch {url}: HTTP {resp.status}')

        try:
            text = resp.body.decode('utf-8')
        except UnicodeDecodeError as exc:
            raise CollectionTransportError(f'could not decode {url}: {exc}') from exc

        self._log.info('✔ fetched %s (%d bytes)', resp.final_url or url, len(resp.body))
        return self._loader.load_str(text, source=url)


def fetch_collection(url: str, transport: Optional[HTTPTransportProtocol] = None) -> Collection:
    return CollectionFetcher(transport=transport).fetch(url)


def fetch_os_collection(os: OS, transport: Optional[HTTPTransportProtocol] = None) -> Collection:
    """Fetch the upstream collection maintained for *os*."""
    return fetch_collection(COLLECTIONS_URL.format(os=os.value), transport=transport)
