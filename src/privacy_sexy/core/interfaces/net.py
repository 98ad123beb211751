from __future__ import annotations
from typing import Protocol, runtime_checkable

from privacy_sexy.core.models import Collection, FetchRequest, FetchResponse


@runtime_checkable
class HTTPTransportProtocol(Protocol):
    def request(self, req: FetchRequest) -> FetchResponse:
        ...


@runtime_checkable
class CollectionFetcherProtocol(Protocol):
    def fetch(self, url: str) -> Collection:
        ...
