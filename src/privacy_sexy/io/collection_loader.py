from __future__ import annotations

"""
Collection loader – YAML documents to immutable models.

Children of a category are told apart by shape: a mapping with `category`
is a Category, one with `name` is a Script. A script or function defining
`call` gets a CallBody; otherwise its `code` / `revertCode` become an
InlineBody (either may be missing, the resolver reports it when selected).

Every structural problem is raised as CollectionFormatError with the path of
the offending node, e.g. ``actions[0].children[3].call[1]``.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import yaml

from privacy_sexy.core.errors import CollectionFormatError, CollectionIOError
from privacy_sexy.core.models import (
    OS,
    Body,
    CallBody,
    Category,
    Collection,
    Function,
    FunctionCall,
    InlineBody,
    ParameterDefinition,
    Recommend,
    Script,
    ScriptingDefinition,
)
from privacy_sexy.logging.helpers import get_logger
from privacy_sexy.runtime.config import collections_dir


class CollectionLoader:
    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        self._log = logger or get_logger('io.loader')

    # ------------------------------------------------------------------ #
    #  Entry points                                                      #
    # ------------------------------------------------------------------ #
    def load_str(self, text: str, *, source: str = '<string>') -> Collection:
        try:
            doc = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise CollectionFormatError(f'{source}: invalid YAML: {exc}') from exc
        return self.build(doc, source=source)

    def load_file(self, path: Union[str, Path]) -> Collection:
        fpath = Path(path)
        try:
            text = fpath.read_text(encoding='utf-8')
        except OSError as exc:
            raise CollectionIOError(f'could not read {fpath}: {exc}') from exc
        self._log.debug('loaded collection file %s', fpath)
        return self.load_str(text, source=str(fpath))

    def build(self, doc: Any, *, source: str = '<document>') -> Collection:
        root = _mapping(doc, source)
        os_tag = _string(root.get('os'), f'{source}.os')
        try:
            os = OS.from_str(os_tag)
        except ValueError as exc:
            raise CollectionFormatError(f'{source}.os: {exc}') from None

        actions_raw = _non_empty_list(root.get('actions'), f'{source}.actions')
        actions = tuple(
            self._category(item, f'actions[{i}]') for i, item in enumerate(actions_raw)
        )

        functions: List[Function] = []
        seen: set[str] = set()
        for i, item in enumerate(_list(root.get('functions'), 'functions')):
            fn = self._function(item, f'functions[{i}]')
            if fn.name in seen:
                raise CollectionFormatError(f'functions[{i}]: duplicate function name {fn.name!r}')
            seen.add(fn.name)
            functions.append(fn)

        collection = Collection(
            os=os,
            scripting=self._scripting(root.get('scripting'), 'scripting'),
            actions=actions,
            functions=tuple(functions),
        )
        self._warn_duplicate_scripts(collection, source)
        return collection

    def _warn_duplicate_scripts(self, collection: Collection, source: str) -> None:
        # Name filters match every script sharing the name.
        seen: set[str] = set()
        for script in collection.iter_scripts():
            if script.name in seen:
                self._log.warning('⚠  %s: script name %r is used more than once', source, script.name)
            seen.add(script.name)

    # ------------------------------------------------------------------ #
    #  Nodes                                                             #
    # ------------------------------------------------------------------ #
    def _scripting(self, raw: Any, path: str) -> ScriptingDefinition:
        data = _mapping(raw, path)
        return ScriptingDefinition(
            language=_string(data.get('language'), f'{path}.language'),
            start_code=_string(data.get('startCode'), f'{path}.startCode'),
            end_code=_string(data.get('endCode'), f'{path}.endCode'),
            file_extension=_opt_string(data.get('fileExtension'), f'{path}.fileExtension'),
        )

    def _child(self, raw: Any, path: str) -> Union[Category, Script]:
        data = _mapping(raw, path)
        if 'category' in data:
            return self._category(data, path)
        if 'name' in data:
            return self._script(data, path)
        raise CollectionFormatError(f'{path}: expected a category or a script')

    def _category(self, raw: Any, path: str) -> Category:
        data = _mapping(raw, path)
        children_raw = _non_empty_list(data.get('children'), f'{path}.children')
        return Category(
            name=_string(data.get('category'), f'{path}.category'),
            children=tuple(
                self._child(item, f'{path}.children[{i}]') for i, item in enumerate(children_raw)
            ),
            docs=_docs(data.get('docs'), f'{path}.docs'),
        )

    def _script(self, data: Mapping[str, Any], path: str) -> Script:
        name = _string(data.get('name'), f'{path}.name')
        recommend_raw = data.get('recommend')
        recommend = None
        if recommend_raw is not None:
            try:
                recommend = Recommend.from_str(_string(recommend_raw, f'{path}.recommend'))
            except ValueError as exc:
                raise CollectionFormatError(f'{path}.recommend: {exc}') from None
        return Script(
            name=name,
            body=self._body(data, path, owner=name),
            docs=_docs(data.get('docs'), f'{path}.docs'),
            recommend=recommend,
        )

    def _function(self, raw: Any, path: str) -> Function:
        data = _mapping(raw, path)
        name = _string(data.get('name'), f'{path}.name')
        params: List[ParameterDefinition] = []
        for i, item in enumerate(_list(data.get('parameters'), f'{path}.parameters')):
            ppath = f'{path}.parameters[{i}]'
            pdata = _mapping(item, ppath)
            optional = pdata.get('optional', False)
            if optional is None:
                optional = False
            if not isinstance(optional, bool):
                raise CollectionFormatError(f'{ppath}.optional: expected a boolean')
            params.append(ParameterDefinition(name=_string(pdata.get('name'), f'{ppath}.name'), optional=optional))
        return Function(name=name, body=self._body(data, path, owner=name), parameters=tuple(params))

    def _body(self, data: Mapping[str, Any], path: str, *, owner: str) -> Body:
        code = _opt_string(data.get('code'), f'{path}.code')
        revert_code = _opt_string(data.get('revertCode'), f'{path}.revertCode')
        call_raw = data.get('call')
        if call_raw is None:
            return InlineBody(code=code, revert_code=revert_code)
        if code is not None or revert_code is not None:
            self._log.warning('⚠  %r defines both call and code; using call', owner)
        return CallBody(calls=self._calls(call_raw, f'{path}.call'))

    def _calls(self, raw: Any, path: str) -> Tuple[FunctionCall, ...]:
        if isinstance(raw, list):
            if not raw:
                raise CollectionFormatError(f'{path}: call list is empty')
            return tuple(self._call(item, f'{path}[{i}]') for i, item in enumerate(raw))
        return (self._call(raw, path),)

    def _call(self, raw: Any, path: str) -> FunctionCall:
        data = _mapping(raw, path)
        params_raw = data.get('parameters')
        params: Dict[str, Optional[str]] = {}
        if params_raw is not None:
            for key, value in _mapping(params_raw, f'{path}.parameters').items():
                params[str(key)] = _argument(value, f'{path}.parameters.{key}')
        return FunctionCall(function=_string(data.get('function'), f'{path}.function'), parameters=params)


# ---------------------------------------------------------------------- #
#  Value helpers                                                         #
# ---------------------------------------------------------------------- #
def _mapping(raw: Any, path: str) -> Mapping[str, Any]:
    if not isinstance(raw, dict):
        raise CollectionFormatError(f'{path}: expected a mapping, got {type(raw).__name__}')
    return raw


def _list(raw: Any, path: str) -> List[Any]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise CollectionFormatError(f'{path}: expected a list, got {type(raw).__name__}')
    return raw


def _non_empty_list(raw: Any, path: str) -> List[Any]:
    items = _list(raw, path)
    if not items:
        raise CollectionFormatError(f'{path}: must contain at least one entry')
    return items


def _string(raw: Any, path: str) -> str:
    if not isinstance(raw, str):
        raise CollectionFormatError(f'{path}: expected a string')
    return raw


def _opt_string(raw: Any, path: str) -> Optional[str]:
    return None if raw is None else _string(raw, path)


def _docs(raw: Any, path: str) -> Tuple[str, ...]:
    if raw is None:
        return ()
    if isinstance(raw, str):
        return (raw,)
    return tuple(_string(item, f'{path}[{i}]') for i, item in enumerate(_list(raw, path)))


def _argument(raw: Any, path: str) -> Optional[str]:
    if raw is None:
        return None
    if isinstance(raw, bool):
        return 'true' if raw else 'false'
    if isinstance(raw, (str, int, float)):
        return str(raw)
    raise CollectionFormatError(f'{path}: expected a scalar argument value')


# ---------------------------------------------------------------------- #
#  Module-level shortcuts                                                #
# ---------------------------------------------------------------------- #
def load_collection_from_str(text: str) -> Collection:
    return CollectionLoader().load_str(text)


def load_collection_from_file(path: Union[str, Path]) -> Collection:
    return CollectionLoader().load_file(path)


def get_collection(os: OS, directory: Optional[Union[str, Path]] = None) -> Collection:
    """Load `<directory>/<os>.yaml` (directory defaults to collections_dir())."""
    base = Path(directory) if directory is not None else collections_dir()
    return load_collection_from_file(base / f'{os.value}.yaml')
