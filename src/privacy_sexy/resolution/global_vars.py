"""
Global variables available to the start/end code of a collection.

    {{ $date }}      – local time, RFC 2822
    {{ $homepage }}  – package homepage
    {{ $version }}   – package version

Homepage and version come from the installed distribution metadata and fall
back to the in-tree constants when the package is not installed.
"""

from datetime import datetime
from email.utils import format_datetime
from importlib import metadata
from typing import Callable, Dict, Mapping, Optional

from privacy_sexy.constants import DIST_NAME, HOMEPAGE
from privacy_sexy.processing.expressions import Placeholder, tokenize

GlobalVarsProvider = Callable[[], Mapping[str, str]]


def _homepage(meta: Optional[metadata.PackageMetadata]) -> str:
    if meta is None:
        return HOMEPAGE
    url = meta.get('Home-page')
    if url and url != 'UNKNOWN':
        return url
    for entry in meta.get_all('Project-URL') or []:
        label, _, link = entry.partition(',')
        if label.strip().lower() in {'homepage', 'home'}:
            return link.strip()
    return HOMEPAGE


def package_globals(now: Optional[datetime] = None) -> Dict[str, str]:
    """Return the global variable mapping for the current process."""
    from privacy_sexy import __version__

    try:
        meta: Optional[metadata.PackageMetadata] = metadata.metadata(DIST_NAME)
    except metadata.PackageNotFoundError:
        meta = None

    stamp = (now or datetime.now()).astimezone()
    return {
        'date': format_datetime(stamp),
        'homepage': _homepage(meta),
        'version': meta['Version'] if meta is not None else __version__,
    }


def substitute_globals(code: str, variables: Mapping[str, str], pipes=None) -> str:
    """Replace global placeholders in *code*; unknown names stay verbatim."""
    out = []
    for seg in tokenize(code):
        if isinstance(seg, Placeholder) and seg.name in variables:
            value = variables[seg.name]
            out.append(pipes.apply(value, seg.pipes) if pipes is not None else value)
        else:
            out.append(seg.raw)
    return ''.join(out)
