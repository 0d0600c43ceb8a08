"""Markdown chunker - splits a document into RAG-friendly chunks.

Each level-2/level-3 heading opens a section. A bolded ``**Q: ...**`` line
starts a question unit that keeps its answer in the same chunk. Buffers longer
than ``max_chars`` are sliced with ``overlap`` characters shared between
neighbouring slices.
"""

import logging
import re
from typing import Iterator, Optional

from ..models.document import Chunk

logger = logging.getLogger(__name__)

MAX_CHARS = 3500  # about 900 tokens
OVERLAP = 200
DEFAULT_SECTION = "Intro"

_HEADING_RE = re.compile(r"^#{2,3}\s+(.+)")
_QUESTION_RE = re.compile(r"^\*\*Q:\s*(.+?)\*\*", re.IGNORECASE)
_TRAILING_WS_RE = re.compile(r"[ \t]+\n")
_NON_WORD_RE = re.compile(r"\W")


def _clean(text: str) -> str:
    """Drop trailing spaces on each line and trim."""
    return _TRAILING_WS_RE.sub("\n", text).strip()


class MarkdownChunker:
    """Single-pass line scanner producing ordered chunks."""

    def __init__(self, max_chars: int = MAX_CHARS, overlap: int = OVERLAP):
        """Initialize chunker.

        Args:
            max_chars: Maximum characters per chunk.
            overlap: Characters shared by consecutive slices of one buffer.
        """
        if max_chars <= 0:
            raise ValueError("max_chars must be positive")
        if not 0 <= overlap < max_chars:
            raise ValueError("overlap must be in [0, max_chars)")
        self._max_chars = max_chars
        self._overlap = overlap

    def _slices(self, text: str) -> Iterator[str]:
        start = 0
        step = self._max_chars - self._overlap
        while start < len(text):
            yield text[start : start + self._max_chars]
            if start + self._max_chars >= len(text):
                break
            start += step

    def split(self, document: str) -> list[Chunk]:
        """Split a markdown document into chunks.

        Args:
            document: Markdown source text.

        Returns:
            Chunks in document order with `order` running 0..n-1.
        """
        chunks: list[Chunk] = []
        section = DEFAULT_SECTION
        question: Optional[str] = None
        buffer: list[str] = []

        def flush() -> None:
            if not buffer:
                return
            text = _clean("\n".join(buffer))
            for piece in self._slices(text):
                # heading-only or separator-only pieces carry nothing to retrieve
                if not _NON_WORD_RE.sub("", piece):
                    continue
                chunks.append(
                    Chunk(text=piece, section=section, question=question, order=len(chunks))
                )
            buffer.clear()

        for line in re.split(r"\r?\n", document or ""):
            heading = _HEADING_RE.match(line)
            if heading:
                flush()
                question = None
                section = _clean(heading.group(1)) or section
                continue

            marker = _QUESTION_RE.match(line)
            if marker:
                flush()
                question = _clean(marker.group(1))
                buffer.append(line)
                continue

            buffer.append(line)

        flush()

        logger.debug(f"Chunked document into {len(chunks)} chunks")
        return chunks
