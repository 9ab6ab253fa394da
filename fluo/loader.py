"""Reading stream files from disk."""
import logging
from pathlib import Path
from typing import Union

from fluo.errors import NoMatch
from fluo.parser import StreamParse, parse_stream

logger = logging.getLogger(__name__)


def read_stream_file(path: Union[str, Path]) -> str:
    """
    Read a whole UTF-8 stream file into memory.

    Raises:
        OSError: if the file cannot be read.
        UnicodeDecodeError: if the file is not valid UTF-8.
    """
    path = Path(path)
    with open(path, 'r', encoding='utf-8', newline='') as f:
        text = f.read()
    logger.info(f"Read {len(text)} characters from {path}")
    return text


def parse_file(path: Union[str, Path], strict: bool = False) -> StreamParse:
    """
    Read a stream file and parse it.

    Unparsed text is left on the result, or raised as NoMatch when `strict`.
    """
    text = read_stream_file(path)
    result = parse_stream(text)
    if not result.complete:
        if strict:
            raise NoMatch(f"{path}: no stream unit starts here", text, result.offset)
        logger.warning(f"{path}: stopped at offset {result.offset}, {len(result.remainder)} characters unparsed")
    return result
