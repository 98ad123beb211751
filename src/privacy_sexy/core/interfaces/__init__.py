from .net import CollectionFetcherProtocol, HTTPTransportProtocol
from .templating import TemplateEngineProtocol
from .text import PipeFn, PipeRegistryProtocol

__all__ = [
    'CollectionFetcherProtocol',
    'HTTPTransportProtocol',
    'PipeFn',
    'PipeRegistryProtocol',
    'TemplateEngineProtocol',
]
