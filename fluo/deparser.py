"""
The De-parser (units -> text).

Renders parsed stream units back into canonical stream notation. Lemma text
is re-escaped, so reparsing the output gives back the same units.
This module is the inverse of the parser.
"""
from typing import Iterable

from fluo.parser import RESERVED_CHARACTERS, parse
from fluo.units import Chunk, Format, JoinedLexicalUnit, LexicalUnit, Space, SubUnit


def escape_lemma(text: str) -> str:
    """Backslash-escape every reserved character in lemma text."""
    return "".join("\\" + c if c in RESERVED_CHARACTERS else c for c in text)


def deparse_subunit(subunit: SubUnit) -> str:
    tags = "".join(f"<{tag}>" for tag in subunit.tags)
    return f"{subunit.flag.marker}{escape_lemma(subunit.ling_form)}{tags}"


def deparse_unit(unit) -> str:
    """
    Render one stream unit in canonical notation.
    """
    if isinstance(unit, LexicalUnit):
        return "^" + "/".join(deparse_subunit(a) for a in unit.analyses) + "$"
    if isinstance(unit, JoinedLexicalUnit):
        slots = ("+".join(deparse_subunit(part) for part in slot) for slot in unit.analyses)
        return "^" + "/".join(slots) + "$"
    if isinstance(unit, Chunk):
        return deparse_subunit(unit.head) + "{" + deparse(unit.children) + "}"
    if isinstance(unit, Format):
        return f"[{unit.text}]"
    if isinstance(unit, Space):
        return unit.text
    raise ValueError(f"Not a stream unit: {unit!r}")


def deparse(units: Iterable) -> str:
    """Concatenate the canonical rendering of each unit."""
    return "".join(deparse_unit(unit) for unit in units)


def round_trip(text: str) -> bool:
    """
    Parse `text`, render it and parse the rendering again.

    Returns True when both parses give the same units. Parse errors in the
    original text propagate.
    """
    units = parse(text)
    return parse(deparse(units)) == units
