"""
Line-delimited JSON transport between the harness and this process.

Each message is one JSON object on one line. Stdout must carry protocol
lines only, so everything else (logging included) goes elsewhere.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict, Optional, TextIO

from kurobako.core.errors import ProtocolError

logger = logging.getLogger(__name__)

DEFAULT_MAX_LINE_LENGTH = 1024 * 1024


class LineChannel:
    """
    Reads inbound messages from a text stream and writes replies to another.

    Args:
        reader: Inbound line source. Defaults to ``sys.stdin``.
        writer: Outbound sink. Defaults to ``sys.stdout``.
        max_line_length: Longest accepted line in characters, excluding the newline.
    """

    def __init__(
        self,
        reader: Optional[TextIO] = None,
        writer: Optional[TextIO] = None,
        max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
    ):
        if max_line_length < 1:
            raise ValueError("max_line_length must be a positive integer")
        self._reader = reader if reader is not None else sys.stdin
        self._writer = writer if writer is not None else sys.stdout
        self._max_line_length = max_line_length

    @property
    def max_line_length(self) -> int:
        return self._max_line_length

    def read_message(self) -> Optional[Dict[str, Any]]:
        """
        Read the next message.

        Returns:
            The decoded JSON object, or None at end of input.

        Raises:
            ProtocolError: if a line is too long or is not a JSON object.
        """
        line = self._reader.readline(self._max_line_length + 1)
        if line == "":
            return None

        content = line.rstrip("\r\n")
        if len(content) > self._max_line_length:
            raise ProtocolError(f"too long input: line exceeds {self._max_line_length} characters")

        # Blank lines are malformed too.
        try:
            message = json.loads(content)
        except json.JSONDecodeError as exc:
            raise ProtocolError(f"malformed JSON line: {exc}") from exc

        if not isinstance(message, dict):
            raise ProtocolError(f"expected a JSON object, got {type(message).__name__}")
        return message

    def write_message(self, message: Dict[str, Any]) -> None:
        line = json.dumps(message, separators=(",", ":"))
        self._writer.write(line + "\n")
        self._writer.flush()
        logger.debug("Sent %s", message.get("type"))
