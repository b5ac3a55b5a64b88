"""
Incremental decoder for the chat completions server-sent event stream.

The backend sends one JSON chunk per `data:` line. Byte chunks delivered by the
HTTP transport do not respect line or even character boundaries, so the decoder
keeps two remainders between calls: the undecoded tail of a multi-byte UTF-8
sequence and the text of an unterminated line.
"""

import codecs
import logging
from typing import List, Optional

from pydantic import ValidationError

from relay.config.constants import LOGGER_NAME, SSE_DATA_PREFIX, SSE_DONE_SENTINEL
from relay.models.openai_schemas import ChatCompletionChunk

logger = logging.getLogger(LOGGER_NAME)


class StreamDecoder:
    """
    Turns the raw bytes of one streaming response into content tokens.

    A decoder belongs to a single streaming call and is discarded with it.
    """

    def __init__(self):
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._partial_line = ""
        self.done = False
        self.skipped_lines = 0

    def feed(self, chunk: bytes) -> List[str]:
        """
        Decode a byte chunk and return the tokens of every line it completes.

        Args:
            chunk: Raw bytes as received from the HTTP response

        Returns:
            Content tokens in arrival order (possibly empty)
        """
        text = self._decoder.decode(chunk)
        if not text:
            return []

        lines = (self._partial_line + text).split("\n")
        self._partial_line = lines.pop()

        tokens = []
        for line in lines:
            token = self._parse_line(line)
            if token:
                tokens.append(token)
        return tokens

    def finish(self) -> None:
        """Signal the end of the response body."""
        trailing = self._partial_line + self._decoder.decode(b"", final=True)
        self._partial_line = ""
        if trailing.strip():
            logger.debug(f"Discarding unterminated stream line: {trailing[:200]}")

    def _parse_line(self, line: str) -> Optional[str]:
        if not line.strip() or not line.startswith(SSE_DATA_PREFIX):
            return None

        payload = line[len(SSE_DATA_PREFIX):].strip()
        if payload == SSE_DONE_SENTINEL:
            logger.debug("OpenAI stream completed")
            self.done = True
            return None

        try:
            chunk = ChatCompletionChunk.model_validate_json(payload)
        except ValidationError:
            self.skipped_lines += 1
            logger.debug(f"Skipping malformed stream record: {payload[:200]}")
            return None

        return chunk.content or None
