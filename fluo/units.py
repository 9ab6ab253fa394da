"""
Stream units: the immutable results produced by the stream parser.

A parsed stream is a flat tuple of units. Lexical units carry one or more
candidate analyses (SubUnits); joined lexical units fuse several SubUnits per
ambiguity slot; chunks group a head SubUnit with a child stream; Format and
Space carry verbatim text so the source can be reconstructed exactly.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, Sequence, Tuple, Union


class Flag(Enum):
    """Status marker written in front of a SubUnit."""
    NONE = ""
    UNANALYZED = "*"
    UNTRANSLATED = "@"
    UNABLE_TO_GENERATE_OR_INVARIANT = "#"

    @classmethod
    def from_marker(cls, marker: str) -> "Flag":
        return cls(marker)

    @property
    def marker(self) -> str:
        return self.value


FLAG_MARKERS = frozenset(flag.value for flag in Flag if flag.value)


@dataclass(frozen=True)
class SubUnit:
    """
    One analysis of a token: lemma text, flag and tags.

    `ling_form` is empty only for flag-only forms such as `*<det>`.
    Tags keep their written order.
    """

    ling_form: str
    flag: Flag = Flag.NONE
    tags: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ling_form": self.ling_form,
            "flag": self.flag.name.lower(),
            "tags": list(self.tags),
        }


@dataclass(frozen=True)
class LexicalUnit:
    """`^a/b<n>$`: ambiguous analyses of one surface token."""

    analyses: Tuple[SubUnit, ...] = ()
    kind = "lexical_unit"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "analyses": [a.to_dict() for a in self.analyses]}


@dataclass(frozen=True)
class JoinedLexicalUnit:
    """`^a<n>+b<v>/c$`: each ambiguity slot holds the fused multiword components."""

    analyses: Tuple[Tuple[SubUnit, ...], ...] = ()
    kind = "joined_lexical_unit"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "analyses": [[part.to_dict() for part in slot] for slot in self.analyses],
        }


@dataclass(frozen=True)
class Format:
    """Opaque `[...]` markup, brackets excluded."""

    text: str
    kind = "format"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "text": self.text}


@dataclass(frozen=True)
class Space:
    """Whitespace between units, kept verbatim."""

    text: str
    kind = "space"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "text": self.text}


ChunkChild = Union[LexicalUnit, JoinedLexicalUnit, Format, Space]


@dataclass(frozen=True)
class Chunk:
    """`head{...}`: a labelled group of child units (one level only)."""

    head: SubUnit
    children: Tuple[ChunkChild, ...] = ()
    kind = "chunk"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "head": self.head.to_dict(),
            "children": [child.to_dict() for child in self.children],
        }


StreamUnit = Union[LexicalUnit, JoinedLexicalUnit, Chunk, Format, Space]


def iter_lexical_units(
    units: Sequence[StreamUnit],
) -> Iterator[Union[LexicalUnit, JoinedLexicalUnit]]:
    """Yield every lexical unit in stream order, including those inside chunks."""
    for unit in units:
        if isinstance(unit, (LexicalUnit, JoinedLexicalUnit)):
            yield unit
        elif isinstance(unit, Chunk):
            yield from iter_lexical_units(unit.children)
