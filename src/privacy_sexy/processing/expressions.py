"""
expressions – Scanner for the {{ … }} expression grammar used by collections.

A template is split into a flat list of segments:

  • Text          – anything outside a recognized expression
  • Placeholder   – {{ $name }} or {{ $name | pipe1 | pipe2 }}
  • CurrentValue  – {{ . }} or {{ . | pipe }} (only meaningful inside `with`)
  • WithOpen      – {{ with $name }}
  • EndMarker     – {{ end }}

Whitespace around names, pipes and keywords is optional. An expression the
grammar does not recognize (e.g. "{{ foo }}") is kept as Text, and scanning
resumes one character after its opening braces so that a valid expression
nested inside garbage is still found.

Every segment keeps its source text in ``raw``; joining the raw values of a
tokenized template reproduces the template byte for byte.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

OPEN = "{{"
CLOSE = "}}"


@dataclass(frozen=True)
class Text:
    raw: str


@dataclass(frozen=True)
class Placeholder:
    raw: str
    name: str
    pipes: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CurrentValue:
    raw: str
    pipes: Tuple[str, ...] = ()


@dataclass(frozen=True)
class WithOpen:
    raw: str
    name: str


@dataclass(frozen=True)
class EndMarker:
    raw: str


Segment = Union[Text, Placeholder, CurrentValue, WithOpen, EndMarker]


def _is_ident_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


class _Cursor:
    """Character cursor over the inside of one {{ … }} expression."""

    def __init__(self, src: str) -> None:
        self._src = src
        self._pos = 0

    def at_end(self) -> bool:
        return self._pos >= len(self._src)

    def peek(self) -> str:
        return "" if self.at_end() else self._src[self._pos]

    def skip_ws(self) -> None:
        while not self.at_end() and self._src[self._pos].isspace():
            self._pos += 1

    def take(self, ch: str) -> bool:
        if self.peek() == ch:
            self._pos += 1
            return True
        return False

    def take_ident(self) -> str:
        start = self._pos
        while not self.at_end() and _is_ident_char(self._src[self._pos]):
            self._pos += 1
        return self._src[start:self._pos]

    def take_keyword(self, word: str) -> bool:
        end = self._pos + len(word)
        if self._src[self._pos:end] != word:
            return False
        if end < len(self._src) and _is_ident_char(self._src[end]):
            return False
        self._pos = end
        return True


def _parse_pipes(cur: _Cursor) -> Optional[Tuple[str, ...]]:
    pipes: List[str] = []
    while True:
        cur.skip_ws()
        if cur.at_end():
            return tuple(pipes)
        if not cur.take("|"):
            return None
        cur.skip_ws()
        pipes.append(cur.take_ident())


def parse_expression(raw: str, inner: str) -> Segment:
    """Classify the inside of one {{ … }} expression.

    Args:
        raw: The full expression including braces (kept on the segment).
        inner: The text between the braces.

    Returns:
        The recognized segment, or Text(raw) when the grammar does not match.
    """
    cur = _Cursor(inner)
    cur.skip_ws()

    if cur.take("$"):
        name = cur.take_ident()
        pipes = _parse_pipes(cur) if name else None
        if pipes is not None:
            return Placeholder(raw=raw, name=name, pipes=pipes)
        return Text(raw)

    if cur.take("."):
        pipes = _parse_pipes(cur)
        return Text(raw) if pipes is None else CurrentValue(raw=raw, pipes=pipes)

    if cur.take_keyword("with"):
        cur.skip_ws()
        if cur.take("$"):
            name = cur.take_ident()
            cur.skip_ws()
            if name and cur.at_end():
                return WithOpen(raw=raw, name=name)
        return Text(raw)

    if cur.take_keyword("end"):
        cur.skip_ws()
        if cur.at_end():
            return EndMarker(raw=raw)

    return Text(raw)


def tokenize(template: str) -> List[Segment]:
    """Split *template* into Text and expression segments."""
    out: List[Segment] = []
    buf: List[str] = []
    i = 0
    n = len(template)

    def _flush() -> None:
        text = "".join(buf)
        buf.clear()
        if text:
            out.append(Text(text))

    while i < n:
        start = template.find(OPEN, i)
        if start == -1:
            buf.append(template[i:])
            break
        end = template.find(CLOSE, start + len(OPEN))
        if end == -1:
            buf.append(template[i:])
            break

        raw = template[start:end + len(CLOSE)]
        seg = parse_expression(raw, template[start + len(OPEN):end])
        if isinstance(seg, Text):
            buf.append(template[i:start + 1])
            i = start + 1
            continue

        buf.append(template[i:start])
        _flush()
        out.append(seg)
        i = end + len(CLOSE)

    _flush()
    return out


def render(segments: Sequence[Segment]) -> str:
    return "".join(seg.raw for seg in segments)


def format_placeholder(name: str, pipes: Sequence[str] = ()) -> str:
    """Build the canonical source form of a placeholder."""
    parts = [f"${name}", *pipes]
    return "{{ " + " | ".join(parts) + " }}"


def find_block_end(segments: Sequence[Segment], open_idx: int) -> Optional[int]:
    """Return the index of the EndMarker closing the WithOpen at *open_idx*.

    Nested `with` blocks are skipped by depth counting. None when unterminated.
    """
    depth = 0
    for k in range(open_idx + 1, len(segments)):
        seg = segments[k]
        if isinstance(seg, WithOpen):
            depth += 1
        elif isinstance(seg, EndMarker):
            if depth == 0:
                return k
            depth -= 1
    return None
