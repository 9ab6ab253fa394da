"""
Parse statistics for a stream.

Summarizes what a parse produced: how many units of each kind, how ambiguous
the lexical units are, which flags occur and how often each tag is used.
"""
from collections import Counter
from typing import Any, Dict, Sequence

from fluo.units import JoinedLexicalUnit, LexicalUnit, StreamUnit, iter_lexical_units


def _subunits(unit):
    if isinstance(unit, LexicalUnit):
        return list(unit.analyses)
    return [part for slot in unit.analyses for part in slot]


def stream_statistics(units: Sequence[StreamUnit]) -> Dict[str, Any]:
    """
    Compute statistics over parsed units, descending into chunks.

    Returns:
        Dict with `unit_counts` (top-level units by kind), `lexical_units`,
        `joined_lexical_units`, `chunk_children`, `analyses`, `ambiguous_units`,
        `ambiguity_rate` (mean analyses per lexical unit), `flags` and
        `tag_frequencies` (most common first).
    """
    unit_counts = Counter(unit.kind for unit in units)
    chunk_children = sum(len(unit.children) for unit in units if unit.kind == "chunk")

    lexical_units = list(iter_lexical_units(units))
    analyses = sum(len(unit.analyses) for unit in lexical_units)
    ambiguous = sum(1 for unit in lexical_units if len(unit.analyses) > 1)

    flags: Counter = Counter()
    tags: Counter = Counter()
    for unit in lexical_units:
        for subunit in _subunits(unit):
            if subunit.flag.marker:
                flags[subunit.flag.name.lower()] += 1
            tags.update(subunit.tags)

    return {
        "unit_counts": dict(unit_counts),
        "lexical_units": len(lexical_units),
        "joined_lexical_units": sum(1 for u in lexical_units if isinstance(u, JoinedLexicalUnit)),
        "chunk_children": chunk_children,
        "analyses": analyses,
        "ambiguous_units": ambiguous,
        "ambiguity_rate": analyses / len(lexical_units) if lexical_units else 0.0,
        "flags": dict(flags),
        "tag_frequencies": dict(tags.most_common()),
    }
