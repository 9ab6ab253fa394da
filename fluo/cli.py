"""
Command-Line Interface for Fluo.

Commands:
- parse: Parse stream text into units
- verify: Round-trip stream files through the parser and de-parser
- info: Show the grammar's reserved characters and flag markers
"""
import argparse
import json
import logging
import sys
import time
from pathlib import Path

from fluo import __version__
from fluo.errors import NoMatch, StreamParseError

logger = logging.getLogger(__name__)


def _describe(unit) -> str:
    """One display line for a unit."""
    from fluo.deparser import deparse_unit

    if unit.kind == 'space':
        return f"{unit.kind:<20} {unit.text!r}"
    return f"{unit.kind:<20} {deparse_unit(unit)}"


def cmd_parse(args):
    """Parse stream text into units."""
    from fluo.loader import parse_file
    from fluo.parser import parse_stream
    from fluo.statistics import stream_statistics

    try:
        if args.file and not args.text:
            result = parse_file(args.file, strict=args.strict)
        else:
            text = args.text if args.text else sys.stdin.read()
            result = parse_stream(text)
            if args.strict and not result.complete:
                raise NoMatch("no stream unit starts here", text, result.offset)
    except (StreamParseError, OSError, UnicodeDecodeError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if args.format == 'json':
        output = {
            "units": [unit.to_dict() for unit in result.units],
            "remainder": result.remainder,
            "offset": result.offset,
        }
        if args.stats:
            output["statistics"] = stream_statistics(result.units)
        print(json.dumps(output, indent=2, ensure_ascii=False))
    else:
        for unit in result.units:
            print(_describe(unit))
        if not result.complete:
            print(f"Unparsed from offset {result.offset}: {result.remainder[:60]!r}")
        if args.stats:
            stats = stream_statistics(result.units)
            print()
            print(f"Lexical units: {stats['lexical_units']} "
                  f"({stats['joined_lexical_units']} joined, {stats['ambiguous_units']} ambiguous)")
            print(f"Analyses per unit: {stats['ambiguity_rate']:.2f}")
            if stats['flags']:
                print("Flags: " + ", ".join(f"{k}={v}" for k, v in stats['flags'].items()))
    return 0


def cmd_verify(args):
    """Round-trip each file and log one result per file."""
    from fluo.deparser import round_trip
    from fluo.loader import read_stream_file
    from fluo.logging_config import ProgressLogger, log_check_result, log_with_context, setup_logging

    setup_logging(log_file=args.log_file, debug=args.debug or None)
    progress = ProgressLogger(total=len(args.files), desc="Verifying")
    failures = 0

    for name in args.files:
        start = time.perf_counter()
        text = ""
        try:
            text = read_stream_file(name)
            ok = round_trip(text)
            error = None if ok else "reparsed units differ"
        except (StreamParseError, OSError, UnicodeDecodeError) as e:
            ok, error = False, str(e)
            log_with_context(f"Round trip failed for {name}", {"error_type": type(e).__name__, "error": e})

        duration_ms = (time.perf_counter() - start) * 1000
        log_check_result(Path(name).name, "PASS" if ok else "FAIL", duration_ms, error)
        failures += 0 if ok else 1
        progress.update(1, characters=len(text))

    progress.close()
    logger.info(f"{len(args.files) - failures}/{len(args.files)} files round-tripped")
    return 1 if failures else 0


def cmd_info(args):
    """Display grammar information."""
    from fluo.parser import RESERVED_CHARACTERS
    from fluo.units import Flag

    print(f"Fluo {__version__}")
    print(f"Reserved characters: {''.join(sorted(RESERVED_CHARACTERS))}")
    print("Flags:")
    for flag in Flag:
        if flag.marker:
            print(f"  {flag.marker}  {flag.name.lower()}")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        prog='fluo',
        description='Fluo - parser for the lexical-unit stream format',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  fluo parse '^vidi<vblex><inf>/vido<n>$ ^hundo<n>$'
  fluo parse --file input.txt --format json --stats
  fluo verify data/*.txt
  fluo info

Environment:
  FLUO_LOG_FILE  log file for verify (default: fluo.log)
  FLUO_DEBUG     set to 1 for debug logging
        """
    )
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # --- parse command ---
    parser_parse = subparsers.add_parser('parse', help='Parse stream text into units')
    parser_parse.add_argument('text', nargs='?', help='Stream text to parse')
    parser_parse.add_argument('-f', '--file', help='Read input from file')
    parser_parse.add_argument('--format', choices=['text', 'json'], default='text',
                              help='Output format (default: text)')
    parser_parse.add_argument('--strict', action='store_true',
                              help='Fail if any text is left unparsed')
    parser_parse.add_argument('--stats', action='store_true', help='Show parse statistics')
    parser_parse.set_defaults(func=cmd_parse)

    # --- verify command ---
    parser_verify = subparsers.add_parser('verify', help='Round-trip stream files')
    parser_verify.add_argument('files', nargs='+', help='Stream files to verify')
    parser_verify.add_argument('--log-file',
                               help='Log file (default: $FLUO_LOG_FILE or fluo.log)')
    parser_verify.add_argument('--debug', action='store_true',
                               help='Enable debug logging (default: $FLUO_DEBUG)')
    parser_verify.set_defaults(func=cmd_verify)

    # --- info command ---
    parser_info = subparsers.add_parser('info', help='Display grammar information')
    parser_info.set_defaults(func=cmd_info)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, 'func'):
        parser.print_help()
        return 1
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
