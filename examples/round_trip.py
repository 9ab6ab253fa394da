#!/usr/bin/env python3
"""
Round-Trip Conversion: Text → Units → Text

Demonstrates parsing stream text into units and rendering it back.
Canonical input comes back unchanged; escaped lemmas come back re-escaped.
"""
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fluo.parser import parse
from fluo.deparser import deparse


def round_trip(stream: str):
    """Parse a stream and reconstruct it."""
    print(f"\n  Original:      {stream!r}")

    units = parse(stream)
    reconstructed = deparse(units)
    print(f"  Reconstructed: {reconstructed!r}")

    match = parse(reconstructed) == units
    print(f"  Match: {'✓' if match else '✗'}")
    return match


def main():
    print("\n" + "*" * 60)
    print("  FLUO: Round-Trip Conversion Examples")
    print("*" * 60)

    groups = [
        ("Lexical units", [
            "^hundo<n><sg><nom>$ ^vidi<vblex><pri><p3><sg>/vido<n>$",
            "^*Zamenhof$ ^@kato<n>$ ^#iri<vblex>$",
        ]),
        ("Multiword units", [
            "^de<pr>+la<det><def>/del<n>$",
        ]),
        ("Chunks and format", [
            "SN<SN><sg>{^la<det>$ [<b>]^hundo<n>$[</b>]}\n",
        ]),
        ("Escapes", [
            r"^\^sign\$<sym>$ ^a\/b<abbr>$",
        ]),
    ]

    results = []
    for number, (title, streams) in enumerate(groups, 1):
        print("\n" + "=" * 60)
        print(f"Example {number}: {title}")
        print("=" * 60)
        for stream in streams:
            results.append(round_trip(stream))

    print("\n" + "=" * 60)
    print("Summary")
    print("=" * 60)
    print(f"\nStreams tested: {len(results)}")
    print(f"Successful round-trips: {sum(results)}")


if __name__ == "__main__":
    main()
