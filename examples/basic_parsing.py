#!/usr/bin/env python3
"""
Basic Stream Parsing Examples

This script parses a few streams and walks the resulting units.
"""
import sys
import json
from pathlib import Path

# Add parent directory to path to import fluo
sys.path.insert(0, str(Path(__file__).parent.parent))

from fluo.parser import parse, parse_stream
from fluo.statistics import stream_statistics
from fluo.units import iter_lexical_units


def example_1_ambiguous_unit():
    """Parse one lexical unit with two analyses."""
    print("=" * 60)
    print("Example 1: Ambiguous Lexical Unit")
    print("=" * 60)

    stream = "^vido<n><sg>/vidi<vblex><imp>$"
    print(f"\nInput: {stream!r}")

    (unit,) = parse(stream)
    for i, analysis in enumerate(unit.analyses, 1):
        print(f"  Analysis {i}: lemma={analysis.ling_form!r} tags={list(analysis.tags)}")


def example_2_chunk():
    """Parse a chunk and list its children."""
    print("\n" + "=" * 60)
    print("Example 2: Chunk")
    print("=" * 60)

    stream = "SN<SN><sg>{^la<det><def>$ ^hundo<n><sg>$}"
    print(f"\nInput: {stream!r}")

    (chunk,) = parse(stream)
    print(f"  Head: {chunk.head.ling_form} {list(chunk.head.tags)}")
    for child in chunk.children:
        print(f"  - {child.kind}")


def example_3_partial_stream():
    """Show how unparsable text is surfaced instead of raised."""
    print("\n" + "=" * 60)
    print("Example 3: Partial Stream")
    print("=" * 60)

    result = parse_stream("^la<det>$ ^hundo<n>$ }trailing")
    print(f"\n  Parsed units: {len(result.units)}")
    print(f"  Stopped at offset {result.offset}: {result.remainder!r}")


def example_4_statistics():
    """Summarize a stream."""
    print("\n" + "=" * 60)
    print("Example 4: Statistics")
    print("=" * 60)

    units = parse("^la<det>$ ^hundo<n>/hundi<vblex>$ ^*Fido$ ^de<pr>+la<det>$")
    print(f"\n  Lexical units: {[u.kind for u in iter_lexical_units(units)]}")
    print(json.dumps(stream_statistics(units), indent=2, ensure_ascii=False))


def main():
    example_1_ambiguous_unit()
    example_2_chunk()
    example_3_partial_stream()
    example_4_statistics()


if __name__ == "__main__":
    main()
