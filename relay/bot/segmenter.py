"""
Punctuation-driven sentence segmentation for streamed replies.

Text is split immediately after each full-width period, comma and question
mark, producing fragments short enough to hand to speech synthesis while the
rest of the reply is still being generated.
"""

import re
from typing import List, Tuple

from relay.config.constants import SENTENCE_DELIMITERS

# Zero-width split point right after any delimiter
_BOUNDARY = re.compile(f"(?<=[{re.escape(SENTENCE_DELIMITERS)}])")


def split_sentences(buffer: str, incoming_text: str) -> Tuple[List[str], str]:
    """
    Split buffered plus incoming text into complete sentences and a remainder.

    Args:
        buffer: Text left over from the previous call ("" for a new reply)
        incoming_text: Newly received text

    Returns:
        The complete sentences in order, and the trailing text (possibly empty)
        that has not been terminated by a delimiter yet
    """
    if not incoming_text:
        return [], buffer

    pieces = _BOUNDARY.split(buffer + incoming_text)
    return pieces[:-1], pieces[-1]


class SentenceSegmenter:
    """Holds the unterminated remainder of one reply between feeds."""

    def __init__(self):
        self.buffer = ""

    def feed(self, text: str) -> List[str]:
        """Add text and return every sentence it completes."""
        sentences, self.buffer = split_sentences(self.buffer, text)
        return sentences

    def flush(self) -> str:
        """Return the remainder and reset for the next reply."""
        remainder, self.buffer = self.buffer, ""
        return remainder
