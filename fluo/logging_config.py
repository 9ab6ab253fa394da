"""
Logging setup for Fluo runs.

Configuration comes from arguments, falling back to the environment:
- FLUO_LOG_FILE: log file path (default: fluo.log)
- FLUO_DEBUG: '1', 'true' or 'yes' turns on debug logging
"""
import logging
import os
import sys
from datetime import datetime

DEFAULT_LOG_FILE = 'fluo.log'


def env_log_file():
    return os.environ.get('FLUO_LOG_FILE') or DEFAULT_LOG_FILE


def env_debug():
    return os.environ.get('FLUO_DEBUG', '').strip().lower() in ('1', 'true', 'yes')


class ProgressLogger:
    """
    Logs progress through a batch of stream files, with character throughput.
    Writes a line every 10%, whenever an item description is given, and at the end.
    """
    def __init__(self, total, desc="Progress", logger=None):
        self.total = total
        self.current = 0
        self.characters = 0
        self.desc = desc
        self.logger = logger or logging.getLogger()
        self.start_time = datetime.now()
        self.last_log_percent = -1

    def update(self, n=1, item_desc=None, characters=0):
        """Advance by n files that together held `characters` characters."""
        self.current += n
        self.characters += characters
        percent = int((self.current / self.total) * 100) if self.total > 0 else 0

        if percent - self.last_log_percent < 10 and not item_desc and self.current != self.total:
            return

        elapsed = (datetime.now() - self.start_time).total_seconds()
        rate = self.current / elapsed if elapsed > 0 else 0
        eta_seconds = (self.total - self.current) / rate if rate > 0 else 0

        msg_parts = [f"{self.desc}: {self.current}/{self.total} ({percent}%)"]
        if item_desc:
            msg_parts.append(f"- {item_desc}")
        if self.characters and elapsed > 0:
            msg_parts.append(f"[{int(self.characters / elapsed)} chars/s]")
        if eta_seconds > 0 and self.current < self.total:
            msg_parts.append(f"[ETA: {int(eta_seconds)}s]")

        self.logger.info(" ".join(msg_parts))
        self.last_log_percent = percent

    def close(self):
        """Mark progress as complete."""
        if self.current < self.total:
            self.current = self.total
            self.update(0)


def setup_logging(log_file=None, level=logging.INFO, debug=None):
    """
    Send log records to a file and to stderr.

    stdout is left to command output, so parsed units printed as JSON stay
    machine-readable.

    Args:
        log_file: Log file path. Defaults to $FLUO_LOG_FILE, then 'fluo.log'.
        level: Logging level when not in debug mode.
        debug: Enables DEBUG level and the file/line format. Defaults to $FLUO_DEBUG.
    """
    log_file = log_file or env_log_file()
    if debug is None:
        debug = env_debug()

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    if debug:
        level = logging.DEBUG
        format_string = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
    else:
        format_string = '%(asctime)s - %(levelname)s - %(message)s'

    handlers = [
        logging.FileHandler(log_file, mode='a', encoding='utf-8'),
        logging.StreamHandler(sys.stderr),
    ]
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(format_string))
        root_logger.addHandler(handler)
    root_logger.setLevel(level)

    logging.info("=" * 80)
    logging.info(f"FLUO RUN STARTED - {datetime.now().strftime('%Y-%m-%d %H:%M:%S')} - log: {log_file}")
    if debug:
        logging.info("DEBUG MODE ENABLED")
    logging.info("=" * 80)


def log_check_result(name, status, duration_ms=None, error=None):
    """
    Log the outcome of one round-trip check.

    Args:
        name: What was checked, usually a file name
        status: 'PASS', 'FAIL', or 'SKIP'
        duration_ms: Optional duration in milliseconds
        error: Optional failure description
    """
    logger = logging.getLogger()

    symbol = {"PASS": "✓", "FAIL": "✗", "SKIP": "○"}.get(status, "?")
    level = logging.INFO if status == "PASS" else logging.ERROR if status == "FAIL" else logging.WARNING

    msg_parts = [f"ROUND TRIP {symbol} {status}:", name]
    if duration_ms is not None:
        msg_parts.append(f"({duration_ms:.0f}ms)")
    if error:
        msg_parts.append(f"- {error}")

    logger.log(level, " ".join(msg_parts))


def log_with_context(message, context=None, level=logging.DEBUG):
    """
    Log a message, then one line per context entry when DEBUG is enabled.

    Values longer than 200 characters are truncated.
    """
    logger = logging.getLogger()
    logger.log(level, message)

    if context and logger.isEnabledFor(logging.DEBUG):
        for key, value in context.items():
            str_value = str(value)
            if len(str_value) > 200:
                str_value = str_value[:200] + "..."
            logger.debug(f"  └─ {key}: {str_value}")
