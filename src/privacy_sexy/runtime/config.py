from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from privacy_sexy.constants import DEFAULT_MAX_DEPTH
from privacy_sexy.logging.helpers import get_logger
from privacy_sexy.processing.pipes import PipeRegistry
from privacy_sexy.resolution.global_vars import GlobalVarsProvider, package_globals


@dataclass(frozen=True)
class ResolverConfig:
    """Immutable configuration shared by the tree and function resolvers."""
    max_depth: int = DEFAULT_MAX_DEPTH
    pipes: PipeRegistry = field(default_factory=PipeRegistry.default)
    global_vars: GlobalVarsProvider = package_globals
    logger: logging.Logger = field(default_factory=lambda: get_logger('resolve'))


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f'{name} must be an integer, got {raw!r}') from None
    if value < 1:
        raise ValueError(f'{name} must be positive, got {value}')
    return value


def build_resolver_config(
    *,
    logger: Optional[logging.Logger] = None,
    max_depth: Optional[int] = None,
    global_vars: Optional[GlobalVarsProvider] = None,
) -> ResolverConfig:
    """Create a ResolverConfig, filling unset values from the environment."""
    lg = logger or get_logger('resolve')
    return ResolverConfig(
        max_depth=max_depth or _env_int('PRIVACY_SEXY_MAX_DEPTH', DEFAULT_MAX_DEPTH),
        pipes=PipeRegistry.default(logger=lg),
        global_vars=global_vars or package_globals,
        logger=lg,
    )


def collections_dir() -> Path:
    """Directory holding `<os>.yaml` collections (PRIVACY_SEXY_COLLECTIONS or ./collections)."""
    return Path(os.getenv('PRIVACY_SEXY_COLLECTIONS') or 'collections')
