"""English-like pseudo text.

Each call produces one paragraph of random lowercase words grouped into
sentences.  Word lengths follow a cumulative frequency table approximating
English, sentence lengths range from 4 to 30 words, and a paragraph holds 5 to
12 sentences.  Sentences start with a capital letter and end with a period.
Paragraphs are word wrapped at 80 columns with every line ending in ``\\n``;
paragraphs after the first are preceded by an empty line.

The output ignores the remaining length of the stream, so the last paragraph is
usually cut short by the caller.
"""

from __future__ import annotations

import random
import string

__all__ = ["TextGenerator", "WORD_LENGTH_THRESHOLDS", "SENTENCE_LENGTHS"]

_LETTERS = string.ascii_lowercase

# Cumulative 16-bit thresholds; a draw below entry ``i`` yields a word of
# ``i + 1`` letters, anything above the last entry yields 16 letters.
WORD_LENGTH_THRESHOLDS: tuple[int, ...] = (
    0x07AF, 0x34E0, 0x6963, 0x8F3E, 0xAAA4, 0xC01E, 0xD472, 0xE3AA,
    0xEF06, 0xF6E7, 0xFB6A, 0xFDDF, 0xFF34, 0xFFC6, 0xFFF9,
)  # fmt: skip
_MAX_WORD_LENGTH = 16


def _sentence_length(i: int) -> int:
    if i < 27:
        return i + 4
    if i < 45:
        return i - 17
    if i < 57:
        return i - 30
    return i - 38


# Indexed by the top 6 bits of a random byte.
SENTENCE_LENGTHS: tuple[int, ...] = tuple(_sentence_length(i) for i in range(64))


class TextGenerator:
    """Generate one paragraph of pseudo text per call."""

    def __init__(self, width: int = 80) -> None:
        if width < _MAX_WORD_LENGTH + 1:
            raise ValueError(f"width must be at least {_MAX_WORD_LENGTH + 1}")
        self.width = width

    # -- Draws ----------------------------------------------------------------

    def _word_length(self, rng: random.Random) -> int:
        draw = int.from_bytes(rng.randbytes(2), "big")
        for i, threshold in enumerate(WORD_LENGTH_THRESHOLDS):
            if draw < threshold:
                return i + 1
        return _MAX_WORD_LENGTH

    def _word(self, rng: random.Random) -> str:
        length = self._word_length(rng)
        return "".join(_LETTERS[rng.randrange(len(_LETTERS))] for _ in range(length))

    def _sentence(self, rng: random.Random) -> list[str]:
        count = SENTENCE_LENGTHS[rng.randbytes(1)[0] >> 2]
        words = [self._word(rng) for _ in range(count)]
        words[0] = words[0][0].upper() + words[0][1:]
        words[-1] += "."
        return words

    def _paragraph(self, rng: random.Random) -> list[str]:
        count = (rng.randbytes(1)[0] >> 5) + 5
        words: list[str] = []
        for _ in range(count):
            words.extend(self._sentence(rng))
        return self._wrap(words)

    # -- Layout ---------------------------------------------------------------

    def _wrap(self, words: list[str]) -> list[str]:
        """Greedily pack ``words`` into lines no wider than ``width``."""

        lines: list[str] = []
        current = ""
        for word in words:
            if not current:
                current = word
            elif len(current) + 1 + len(word) <= self.width:
                current = f"{current} {word}"
            else:
                lines.append(current + "\n")
                current = word
        if current:
            lines.append(current + "\n")
        return lines

    def generate(self, rng: random.Random, pos: int, rem: int) -> bytes:
        _ = rem
        text = "".join(self._paragraph(rng))
        if pos > 0:
            text = "\n" + text
        return text.encode("ascii")

    def __repr__(self) -> str:
        return f"TextGenerator(width={self.width})"
