# This file makes the 'fluo' directory a Python package.

__version__ = "0.1.0"

from fluo.units import Chunk, Flag, Format, JoinedLexicalUnit, LexicalUnit, Space, SubUnit
from fluo.errors import InvalidEscape, NoMatch, StreamParseError, UnterminatedUnit
from fluo.parser import StreamParse, parse, parse_stream
from fluo.deparser import deparse, round_trip

__all__ = [
    'Chunk',
    'Flag',
    'Format',
    'JoinedLexicalUnit',
    'LexicalUnit',
    'Space',
    'SubUnit',
    'InvalidEscape',
    'NoMatch',
    'StreamParseError',
    'UnterminatedUnit',
    'StreamParse',
    'parse',
    'parse_stream',
    'deparse',
    'round_trip',
]
