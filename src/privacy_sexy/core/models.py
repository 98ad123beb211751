from __future__ import annotations

"""
Immutable data model for collections.

A collection is a tree of categories whose leaves are scripts. Scripts and
functions carry exactly one body variant:

  • InlineBody – literal code plus optional revert code
  • CallBody   – an ordered chain of function calls
"""

import enum
import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterator, Mapping, Optional, Sequence, Tuple, Union

from privacy_sexy.core.errors import UnsupportedOSError

if TYPE_CHECKING:  # pragma: no cover
    from privacy_sexy.core.report import ResolutionReport
    from privacy_sexy.runtime.config import ResolverConfig


class OS(str, enum.Enum):
    """Operating systems a collection can target."""

    WINDOWS = 'windows'
    MACOS = 'macos'
    LINUX = 'linux'

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_str(cls, value: str) -> 'OS':
        key = (value or '').strip().lower()
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(f'unknown os {value!r}')

    @classmethod
    def system(cls) -> 'OS':
        """Return the OS of the running interpreter."""
        plat = sys.platform
        if plat.startswith('win'):
            return cls.WINDOWS
        if plat == 'darwin':
            return cls.MACOS
        if plat.startswith('linux'):
            return cls.LINUX
        raise UnsupportedOSError(f'unsupported OS: {plat}')


class Recommend(enum.IntEnum):
    """Recommendation level, ordered from conservative to aggressive."""

    STANDARD = 1
    STRICT = 2

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def from_str(cls, value: str) -> 'Recommend':
        key = (value or '').strip().lower()
        for member in cls:
            if member.label == key:
                return member
        raise ValueError(f'unknown recommendation level {value!r}')

    def admits(self, level: Optional['Recommend']) -> bool:
        """True when a script at *level* passes a filter set to this level."""
        return level is not None and level <= self


@dataclass(frozen=True)
class ScriptingDefinition:
    language: str
    start_code: str
    end_code: str
    file_extension: Optional[str] = None


@dataclass(frozen=True)
class ParameterDefinition:
    name: str
    optional: bool = False


@dataclass(frozen=True)
class FunctionCall:
    function: str
    parameters: Mapping[str, Optional[str]] = field(default_factory=dict)


@dataclass(frozen=True)
class InlineBody:
    code: Optional[str] = None
    revert_code: Optional[str] = None

    def select(self, revert: bool) -> Optional[str]:
        return self.revert_code if revert else self.code


@dataclass(frozen=True)
class CallBody:
    calls: Tuple[FunctionCall, ...]


Body = Union[InlineBody, CallBody]


@dataclass(frozen=True)
class Script:
    name: str
    body: Body
    docs: Tuple[str, ...] = ()
    recommend: Optional[Recommend] = None


@dataclass(frozen=True)
class Function:
    name: str
    body: Body
    parameters: Tuple[ParameterDefinition, ...] = ()


@dataclass(frozen=True)
class Category:
    name: str
    children: Tuple[Union['Category', Script], ...]
    docs: Tuple[str, ...] = ()

    def iter_scripts(self) -> Iterator[Script]:
        """Yield every script below this category in declaration order."""
        for child in self.children:
            if isinstance(child, Category):
                yield from child.iter_scripts()
            else:
                yield child


@dataclass(frozen=True)
class Collection:
    os: OS
    scripting: ScriptingDefinition
    actions: Tuple[Category, ...]
    functions: Tuple[Function, ...] = ()

    def function_table(self) -> Dict[str, Function]:
        return {fn.name: fn for fn in self.functions}

    def iter_scripts(self) -> Iterator[Script]:
        for category in self.actions:
            yield from category.iter_scripts()

    def parse(
        self,
        names: Optional[Sequence[str]] = None,
        revert: bool = False,
        recommend: Optional[Recommend] = None,
        *,
        config: Optional['ResolverConfig'] = None,
        report: Optional['ResolutionReport'] = None,
    ) -> str:
        """Resolve the collection into one script (see CollectionResolver.parse)."""
        from privacy_sexy.resolution.tree_resolver import CollectionResolver  # local import

        return CollectionResolver(self, config=config, report=report).parse(names, revert, recommend)


@dataclass(frozen=True)
class FetchRequest:
    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes | None = None
    timeout: float | None = None


@dataclass(frozen=True)
class FetchResponse:
    status: int
    headers: Mapping[str, str]
    body: bytes
    final_url: str
