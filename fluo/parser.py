"""A from-scratch, pure Python parser for the lexical-unit stream format.

The stream format interleaves lexical units (`^lemma<tag>/other<tag>$`),
multiword units (`^a<n>+b<v>$`), chunks (`head<tag>{^a$ ^b$}`), opaque format
blocks (`[...]`) and whitespace. Every attempt function below takes the full
text and a start offset and returns `(unit, next_offset)` on success or `None`
when its shape does not start at that offset. Once an opening delimiter has
been consumed, failures raise instead of returning `None`.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from fluo.errors import InvalidEscape, NoMatch, UnterminatedUnit
from fluo.units import (
    FLAG_MARKERS,
    Chunk,
    Flag,
    Format,
    JoinedLexicalUnit,
    LexicalUnit,
    Space,
    StreamUnit,
    SubUnit,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# --- Reserved characters
# -----------------------------------------------------------------------------
# One set for the whole grammar: lemma text and escapes both draw from it.

RESERVED_CHARACTERS = frozenset("^$/<>{}\\[]*#@")

_LEMMA_RUN = re.compile("[^" + "".join(re.escape(c) for c in sorted(RESERVED_CHARACTERS)) + "]+")
_TAG = re.compile(r"<([^<>]+)>")
_HORIZONTAL_SPACE = re.compile(r"[ \t\r]+")
_FORMAT_BODY = re.compile(r"[^\[\]]*")

Attempt = Callable[[str, int], Optional[Tuple[StreamUnit, int]]]


# -----------------------------------------------------------------------------
# --- Layer 1: Primitives
# -----------------------------------------------------------------------------

def parse_lemma(text: str, pos: int) -> Optional[Tuple[str, int]]:
    """
    Read a run of literal characters starting at `pos`, resolving escapes.

    A backslash must be followed by a reserved character, which is emitted
    literally. Returns None if nothing was consumed.
    """
    parts: List[str] = []
    i = pos
    end = len(text)
    while i < end:
        run = _LEMMA_RUN.match(text, i)
        if run:
            parts.append(run.group())
            i = run.end()
            continue
        if text[i] != "\\":
            break
        if i + 1 >= end or text[i + 1] not in RESERVED_CHARACTERS:
            raise InvalidEscape("backslash must escape one of " + "".join(sorted(RESERVED_CHARACTERS)),
                                text, i)
        parts.append(text[i + 1])
        i += 2

    if i == pos:
        return None
    return "".join(parts), i


def parse_tag(text: str, pos: int) -> Optional[Tuple[str, int]]:
    """Read one `<tag>` token."""
    match = _TAG.match(text, pos)
    if not match:
        return None
    return match.group(1), match.end()


def parse_tags(text: str, pos: int) -> Tuple[Tuple[str, ...], int]:
    """Read zero or more consecutive tags, in written order."""
    tags = []
    result = parse_tag(text, pos)
    while result is not None:
        tag, pos = result
        tags.append(tag)
        result = parse_tag(text, pos)
    return tuple(tags), pos


# -----------------------------------------------------------------------------
# --- Layer 2: SubUnits and analyses
# -----------------------------------------------------------------------------

def parse_subunit(text: str, pos: int) -> Optional[Tuple[SubUnit, int]]:
    """
    Parse `flag? lemma? tag*`.

    The lemma form is tried first. Without a lemma the flag is required, which
    gives the flag-only form (`*<det><sg>`) with an empty `ling_form`.
    """
    i = pos
    flag = Flag.NONE
    if i < len(text) and text[i] in FLAG_MARKERS:
        flag = Flag.from_marker(text[i])
        i += 1

    lemma = parse_lemma(text, i)
    if lemma is not None:
        ling_form, i = lemma
    elif flag is not Flag.NONE:
        ling_form = ""
    else:
        return None

    tags, i = parse_tags(text, i)
    return SubUnit(ling_form, flag, tags), i


def _parse_separated(text: str, pos: int, separator: str, item) -> Tuple[list, int]:
    """
    Parse `item (separator item)*`, possibly empty.

    A separator not followed by an item is left unconsumed for the caller.
    """
    items = []
    result = item(text, pos)
    while result is not None:
        value, pos = result
        items.append(value)
        if not text.startswith(separator, pos):
            break
        result = item(text, pos + 1)
    return items, pos


def _parse_joined_slot(text: str, pos: int) -> Optional[Tuple[Tuple[SubUnit, ...], int]]:
    parts, end = _parse_separated(text, pos, "+", parse_subunit)
    if not parts:
        return None
    return tuple(parts), end


def parse_analyses(text: str, pos: int) -> Tuple[Tuple[Tuple[SubUnit, ...], ...], int]:
    """
    Parse a lexical unit body: `/`-separated slots of `+`-joined SubUnits.

    Slot order is source order; nothing is reordered or deduplicated.
    """
    slots, end = _parse_separated(text, pos, "/", _parse_joined_slot)
    return tuple(slots), end


# -----------------------------------------------------------------------------
# --- Layer 3: Stream units
# -----------------------------------------------------------------------------

def parse_lexical_unit(text: str, pos: int) -> Optional[Tuple[StreamUnit, int]]:
    """
    Parse `^body$` into a LexicalUnit, or a JoinedLexicalUnit when the body
    contains a `+` join.

    Both shapes share one scan of the body; the plain shape is returned
    whenever every slot holds a single SubUnit.
    """
    if not text.startswith("^", pos):
        return None
    slots, end = parse_analyses(text, pos + 1)
    if not text.startswith("$", end):
        raise UnterminatedUnit(f"expected '$' to close lexical unit opened at offset {pos}", text, end)

    if all(len(slot) == 1 for slot in slots):
        return LexicalUnit(tuple(slot[0] for slot in slots)), end + 1
    return JoinedLexicalUnit(slots), end + 1


def parse_format(text: str, pos: int) -> Optional[Tuple[Format, int]]:
    """Parse an opaque `[...]` block; its contents are kept verbatim."""
    if not text.startswith("[", pos):
        return None
    body = _FORMAT_BODY.match(text, pos + 1)
    end = body.end()
    if not text.startswith("]", end):
        raise UnterminatedUnit(f"expected ']' to close format block opened at offset {pos}", text, end)
    return Format(body.group()), end + 1


def parse_space(text: str, pos: int) -> Optional[Tuple[Space, int]]:
    """A run of spaces, tabs and carriage returns, or a single newline."""
    if text.startswith("\n", pos):
        return Space("\n"), pos + 1
    match = _HORIZONTAL_SPACE.match(text, pos)
    if not match:
        return None
    return Space(match.group()), match.end()


# Chunk children: no nested chunks.
CHUNK_CHILD_ALTERNATIVES: Tuple[Attempt, ...] = (parse_space, parse_format, parse_lexical_unit)


def parse_chunk(text: str, pos: int) -> Optional[Tuple[Chunk, int]]:
    """
    Parse `head{children}`.

    A head that is not followed by `{` is not a chunk, and neither is text
    with a bad escape where a head would be. After the `{` every position
    must start a child or the closing `}`.
    """
    try:
        head = parse_subunit(text, pos)
    except InvalidEscape:
        logger.debug(f"No chunk head at offset {pos}: invalid escape")
        return None
    if head is None:
        return None
    head, i = head
    if not text.startswith("{", i):
        return None
    opened_at = i
    i += 1

    children = []
    while not text.startswith("}", i):
        for attempt in CHUNK_CHILD_ALTERNATIVES:
            result = attempt(text, i)
            if result is not None:
                break
        else:
            raise UnterminatedUnit(f"expected '}}' to close chunk opened at offset {opened_at}", text, i)
        child, i = result
        children.append(child)

    return Chunk(head, tuple(children)), i + 1


# -----------------------------------------------------------------------------
# --- Layer 4: Stream
# -----------------------------------------------------------------------------

# Ordered choice, highest priority first. parse_lexical_unit covers both the
# plain and the joined shape.
STREAM_ALTERNATIVES: Tuple[Attempt, ...] = (parse_space, parse_format, parse_lexical_unit, parse_chunk)


@dataclass(frozen=True)
class StreamParse:
    """Units parsed from a text plus whatever could not be parsed."""

    units: Tuple[StreamUnit, ...]
    remainder: str
    offset: int

    @property
    def complete(self) -> bool:
        return not self.remainder


def _next_unit(text: str, pos: int) -> Optional[Tuple[StreamUnit, int]]:
    for attempt in STREAM_ALTERNATIVES:
        result = attempt(text, pos)
        if result is not None:
            return result
    return None


def parse_stream(text: str) -> StreamParse:
    """
    Parse a stream, stopping at the first position no alternative matches.

    Unconsumed text is returned on the result rather than raised; malformed
    units (unterminated delimiters, bad escapes) still raise.
    """
    units = []
    pos = 0
    while pos < len(text):
        result = _next_unit(text, pos)
        if result is None or result[1] <= pos:
            logger.debug(f"Stream stopped at offset {pos} after {len(units)} units")
            break
        unit, pos = result
        units.append(unit)

    return StreamParse(tuple(units), text[pos:], pos)


def parse(text: str) -> Tuple[StreamUnit, ...]:
    """
    Parse a complete stream.

    Raises:
        NoMatch: if any text is left that no alternative matches.
        UnterminatedUnit: if a `^`, `{` or `[` is never closed.
        InvalidEscape: if a backslash inside a unit escapes a non-reserved character.
    """
    result = parse_stream(text)
    if not result.complete:
        raise NoMatch("no lexical unit, chunk, format block or space starts here", text, result.offset)
    return result.units


if __name__ == '__main__':
    # Example Usage
    import json

    def pretty_print(data):
        print(json.dumps(data, indent=2, ensure_ascii=False))

    stream = "N1<SN><a>{^i$ [<o>]^j$[</o>]^k$} ^ab/xy<n>+tx<a>$"
    print(f"--- Parsing stream: '{stream}' ---")
    pretty_print([unit.to_dict() for unit in parse(stream)])
