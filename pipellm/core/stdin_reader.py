import sys
import logging
from typing import Optional, TextIO

logger = logging.getLogger("app.prompt")


def read_stdin(stream: Optional[TextIO] = None) -> str:
    """
    Read piped input, if any.

    An interactive terminal is never read from, so the call does not block
    when nothing is piped. Piped input is drained to end-of-stream, line
    terminators are normalized to "\\n" and surrounding whitespace is stripped.
    Bytes that are not valid UTF-8 are replaced rather than rejected.

    Args:
        stream: Readable text stream with isatty(); defaults to sys.stdin

    Returns:
        The trimmed input, or "" for a terminal or a missing stream
    """
    if stream is None:
        stream = sys.stdin
    if stream is None or stream.isatty():
        return ""

    buffer = getattr(stream, "buffer", None)
    if buffer is not None:
        text = buffer.read().decode("utf-8", errors="replace")
    else:
        text = stream.read()

    lines = [line.rstrip("\r") for line in text.split("\n")]
    logger.debug(f"Read {len(lines)} line(s) from stdin")
    return "\n".join(lines).strip()
