"""
Tests for the from-scratch, pure Python stream parser.
"""
import unittest

from fluo.errors import InvalidEscape, NoMatch, UnterminatedUnit
from fluo.parser import (
    parse,
    parse_chunk,
    parse_format,
    parse_lemma,
    parse_lexical_unit,
    parse_space,
    parse_stream,
    parse_subunit,
    parse_tag,
    parse_tags,
)
from fluo.units import Chunk, Flag, Format, JoinedLexicalUnit, LexicalUnit, Space, SubUnit


def lu(*analyses):
    return LexicalUnit(tuple(analyses))


class TestLemma(unittest.TestCase):

    def test_plain_run_stops_at_delimiter(self):
        self.assertEqual(parse_lemma("ab$", 0), ("ab", 2))

    def test_escapes_are_resolved(self):
        """Tests that '\\^' and '\\$' become literal characters."""
        self.assertEqual(parse_lemma(r"\^ab\$", 0), ("^ab$", 6))

    def test_escaped_backslash(self):
        self.assertEqual(parse_lemma(r"a\\b", 0), ("a\\b", 4))

    def test_empty_run_is_no_match(self):
        self.assertIsNone(parse_lemma("$", 0))
        self.assertIsNone(parse_lemma("", 0))

    def test_invalid_escape_reports_backslash_offset(self):
        with self.assertRaises(InvalidEscape) as ctx:
            parse_lemma(r"a\bc", 0)
        self.assertEqual(ctx.exception.offset, 1)

    def test_trailing_backslash_is_invalid(self):
        with self.assertRaises(InvalidEscape) as ctx:
            parse_lemma("a\\", 0)
        self.assertEqual(ctx.exception.offset, 1)

    def test_plus_and_spaces_are_lemma_text(self):
        self.assertEqual(parse_lemma("New York+x<np>", 0), ("New York+x", 10))


class TestTags(unittest.TestCase):

    def test_single_tag(self):
        self.assertEqual(parse_tag("<n>", 0), ("n", 3))

    def test_empty_tag_is_no_match(self):
        self.assertIsNone(parse_tag("<>", 0))

    def test_tags_keep_written_order(self):
        self.assertEqual(parse_tags("<n><pl><nom>$", 0), (("n", "pl", "nom"), 12))

    def test_no_tags(self):
        self.assertEqual(parse_tags("$", 0), ((), 0))


class TestSubUnit(unittest.TestCase):

    def test_lemma_and_tags(self):
        self.assertEqual(parse_subunit("hundo<n><sg>$", 0),
                         (SubUnit("hundo", Flag.NONE, ("n", "sg")), 12))

    def test_flag_markers(self):
        self.assertEqual(parse_subunit("*kato", 0)[0].flag, Flag.UNANALYZED)
        self.assertEqual(parse_subunit("@kato", 0)[0].flag, Flag.UNTRANSLATED)
        self.assertEqual(parse_subunit("#kato", 0)[0].flag, Flag.UNABLE_TO_GENERATE_OR_INVARIANT)

    def test_flag_only_form_has_empty_lemma(self):
        subunit, end = parse_subunit("*<det><ind><sg>$", 0)
        self.assertEqual(subunit, SubUnit("", Flag.UNANALYZED, ("det", "ind", "sg")))
        self.assertEqual(end, 15)

    def test_tags_without_lemma_or_flag_do_not_match(self):
        self.assertIsNone(parse_subunit("<n>", 0))


class TestLexicalUnit(unittest.TestCase):

    def test_basic_lu(self):
        self.assertEqual(parse("^ab$"), (lu(SubUnit("ab")),))

    def test_non_ascii_lemma(self):
        self.assertEqual(parse("^กา$"), (lu(SubUnit("กา")),))

    def test_escaped_lemma(self):
        self.assertEqual(parse(r"^\^ab\$$"), (lu(SubUnit("^ab$")),))

    def test_ambiguity_order_is_preserved(self):
        (unit,) = parse("^ab/xy$")
        self.assertEqual([a.ling_form for a in unit.analyses], ["ab", "xy"])

    def test_duplicate_analyses_are_kept(self):
        (unit,) = parse("^ab/ab$")
        self.assertEqual(len(unit.analyses), 2)

    def test_empty_body(self):
        self.assertEqual(parse("^$"), (LexicalUnit(()),))

    def test_flag_only_analysis(self):
        self.assertEqual(parse("^*<det><ind><sg>$"),
                         (lu(SubUnit("", Flag.UNANALYZED, ("det", "ind", "sg"))),))

    def test_lemma_with_spaces(self):
        self.assertEqual(parse("^New York<np><loc>$"),
                         (lu(SubUnit("New York", tags=("np", "loc"))),))

    def test_unterminated(self):
        with self.assertRaises(UnterminatedUnit) as ctx:
            parse("^ab")
        self.assertEqual(ctx.exception.offset, 3)

    def test_dangling_slash_is_unterminated(self):
        with self.assertRaises(UnterminatedUnit) as ctx:
            parse("^a/$")
        self.assertEqual(ctx.exception.offset, 2)

    def test_broken_tag_is_unterminated(self):
        with self.assertRaises(UnterminatedUnit) as ctx:
            parse("^a<n$")
        self.assertEqual(ctx.exception.offset, 2)

    def test_invalid_escape_inside_unit(self):
        with self.assertRaises(InvalidEscape) as ctx:
            parse(r"^a\n$")
        self.assertEqual(ctx.exception.offset, 2)

    def test_not_a_lexical_unit(self):
        self.assertIsNone(parse_lexical_unit("ab$", 0))


class TestJoinedLexicalUnit(unittest.TestCase):

    def test_joined_slot(self):
        self.assertEqual(parse("^ab/xy<n>+tx<a>$"), (JoinedLexicalUnit((
            (SubUnit("ab"),),
            (SubUnit("xy", tags=("n",)), SubUnit("tx", tags=("a",))),
        )),))

    def test_plus_inside_lemma_stays_plain(self):
        (unit,) = parse("^a+b$")
        self.assertIsInstance(unit, LexicalUnit)
        self.assertEqual(unit.analyses, (SubUnit("a+b"),))

    def test_plus_free_body_is_never_joined(self):
        (unit,) = parse("^a<n>/b<v>/c<adj>$")
        self.assertIsInstance(unit, LexicalUnit)

    def test_join_after_flag_only_form(self):
        (unit,) = parse("^*<x>+b<v>$")
        self.assertEqual(unit, JoinedLexicalUnit((
            (SubUnit("", Flag.UNANALYZED, ("x",)), SubUnit("b", tags=("v",))),
        )))

    def test_dangling_plus_is_unterminated(self):
        with self.assertRaises(UnterminatedUnit) as ctx:
            parse("^a<n>+$")
        self.assertEqual(ctx.exception.offset, 5)


class TestChunk(unittest.TestCase):

    def test_chunk_with_format_and_spaces(self):
        units = parse("N1<SN><a>{^i$ [<o>]^j$[</o>]^k$}")
        self.assertEqual(units, (Chunk(
            SubUnit("N1", tags=("SN", "a")),
            (lu(SubUnit("i")), Space(" "), Format("<o>"), lu(SubUnit("j")),
             Format("</o>"), lu(SubUnit("k"))),
        ),))

    def test_empty_chunk(self):
        self.assertEqual(parse("h{}"), (Chunk(SubUnit("h")),))

    def test_flagged_head(self):
        (chunk,) = parse("*x{^a$}")
        self.assertEqual(chunk.head, SubUnit("x", Flag.UNANALYZED))

    def test_joined_child(self):
        (chunk,) = parse("S{^a<n>+b<v>$}")
        self.assertIsInstance(chunk.children[0], JoinedLexicalUnit)

    def test_head_without_brace_is_not_a_chunk(self):
        self.assertIsNone(parse_chunk("N1<SN> ^a$", 0))

    def test_unterminated_chunk(self):
        with self.assertRaises(UnterminatedUnit) as ctx:
            parse("N1<SN>{^i$")
        self.assertEqual(ctx.exception.offset, 10)

    def test_bad_escape_in_head_is_not_a_chunk(self):
        self.assertIsNone(parse_chunk("a\\qb{^i$}", 0))

    def test_bad_escape_in_child_still_raises(self):
        with self.assertRaises(InvalidEscape) as ctx:
            parse("S{^a\\q$}")
        self.assertEqual(ctx.exception.offset, 4)

    def test_nested_chunk_is_rejected(self):
        with self.assertRaises(UnterminatedUnit) as ctx:
            parse("A{B{^i$}}")
        self.assertEqual(ctx.exception.offset, 2)


class TestFormatAndSpace(unittest.TestCase):

    def test_format(self):
        self.assertEqual(parse_format("[<o>]x", 0), (Format("<o>"), 5))

    def test_empty_format(self):
        self.assertEqual(parse_format("[]", 0), (Format(""), 2))

    def test_unterminated_format(self):
        with self.assertRaises(UnterminatedUnit) as ctx:
            parse_format("[abc", 0)
        self.assertEqual(ctx.exception.offset, 4)

    def test_nested_bracket_is_unterminated(self):
        with self.assertRaises(UnterminatedUnit) as ctx:
            parse("[a[b]")
        self.assertEqual(ctx.exception.offset, 2)

    def test_horizontal_space_run(self):
        self.assertEqual(parse_space(" \t ^a$", 0), (Space(" \t "), 3))

    def test_each_newline_is_its_own_unit(self):
        self.assertEqual(parse("\n\n"), (Space("\n"), Space("\n")))

    def test_crlf_line_ending(self):
        self.assertEqual(parse("^a$\r\n"), (lu(SubUnit("a")), Space("\r"), Space("\n")))

    def test_no_space(self):
        self.assertIsNone(parse_space("^a$", 0))


class TestStream(unittest.TestCase):

    def test_units_with_space(self):
        self.assertEqual(parse("^ab/xy<n>$ ^cd$"), (
            lu(SubUnit("ab"), SubUnit("xy", tags=("n",))),
            Space(" "),
            lu(SubUnit("cd")),
        ))

    def test_empty_input(self):
        result = parse_stream("")
        self.assertEqual(result.units, ())
        self.assertTrue(result.complete)

    def test_remainder_is_surfaced(self):
        result = parse_stream("^a$ rest")
        self.assertEqual(result.units, (lu(SubUnit("a")), Space(" ")))
        self.assertEqual(result.remainder, "rest")
        self.assertEqual(result.offset, 4)
        self.assertFalse(result.complete)

    def test_plain_text_yields_no_units(self):
        result = parse_stream("plain text")
        self.assertEqual(result.units, ())
        self.assertEqual(result.remainder, "plain text")

    def test_bad_escape_in_trailing_text_ends_stream(self):
        result = parse_stream("^a$ C:\\temp")
        self.assertEqual(result.units, (lu(SubUnit("a")), Space(" ")))
        self.assertEqual(result.remainder, "C:\\temp")
        self.assertEqual(result.offset, 4)

        result = parse_stream("^a$ x\\q y")
        self.assertEqual(result.remainder, "x\\q y")

    def test_bad_escape_in_trailing_text_is_no_match_when_strict(self):
        with self.assertRaises(NoMatch) as ctx:
            parse("^a$ C:\\temp")
        self.assertEqual(ctx.exception.offset, 4)

    def test_strict_parse_raises_no_match(self):
        with self.assertRaises(NoMatch) as ctx:
            parse("^a$ rest")
        self.assertEqual(ctx.exception.offset, 4)

    def test_mixed_stream(self):
        units = parse("[{\\b}]^la<det><def>$ S<SN>{^hundo<n>$}\n")
        self.assertEqual([u.kind for u in units],
                         ["format", "lexical_unit", "space", "chunk", "space"])

    def test_error_position(self):
        with self.assertRaises(UnterminatedUnit) as ctx:
            parse("^a$\n^b")
        self.assertEqual(ctx.exception.offset, 6)
        self.assertEqual(ctx.exception.line, 2)
        self.assertEqual(ctx.exception.column, 3)
        self.assertIn("line 2", str(ctx.exception))


if __name__ == '__main__':
    unittest.main()
