from __future__ import annotations

__version__ = '0.3.0'

from privacy_sexy.core.errors import (
    CallCodeError,
    CallCycleError,
    CollectionFormatError,
    CollectionIOError,
    CollectionReadError,
    CollectionTransportError,
    DepthLimitError,
    FunctionError,
    ParameterError,
    ParseError,
    ScriptRunError,
    UnsupportedOSError,
)
from privacy_sexy.core.models import OS, Collection, Recommend
from privacy_sexy.core.report import ResolutionReport
from privacy_sexy.io.collection_loader import (
    CollectionLoader,
    get_collection,
    load_collection_from_file,
    load_collection_from_str,
)
from privacy_sexy.net.collection_fetcher import CollectionFetcher, fetch_collection, fetch_os_collection
from privacy_sexy.processing.pipes import PipeRegistry
from privacy_sexy.rendering.formatter import format_section
from privacy_sexy.rendering.template_engine import ParameterTemplateEngine
from privacy_sexy.resolution.function_resolver import FunctionResolver
from privacy_sexy.resolution.tree_resolver import CollectionResolver, parse
from privacy_sexy.runtime.config import ResolverConfig, build_resolver_config
from privacy_sexy.runtime.execution import run_script
from privacy_sexy.logging.helpers import get_logger

__all__ = [
    'OS',
    'Collection',
    'Recommend',
    'ResolutionReport',
    'CollectionLoader',
    'CollectionFetcher',
    'CollectionResolver',
    'FunctionResolver',
    'ParameterTemplateEngine',
    'PipeRegistry',
    'ResolverConfig',
    'build_resolver_config',
    'format_section',
    'get_collection',
    'load_collection_from_file',
    'load_collection_from_str',
    'fetch_collection',
    'fetch_os_collection',
    'parse',
    'run_script',
    'get_logger',
    'ParseError',
    'FunctionError',
    'ParameterError',
    'CallCodeError',
    'CallCycleError',
    'DepthLimitError',
    'CollectionReadError',
    'CollectionIOError',
    'CollectionFormatError',
    'CollectionTransportError',
    'ScriptRunError',
    'UnsupportedOSError',
]
