"""Tests for the pseudo text generator."""

from __future__ import annotations

import re

from randdata.generators import TextGenerator, draw_stream
from randdata.generators.text import SENTENCE_LENGTHS, WORD_LENGTH_THRESHOLDS
from randdata.reader import Reader

_ALLOWED = re.compile(r"^[A-Za-z .\n]*$")


def _paragraphs(seed: int, count: int) -> list[str]:
    gen = TextGenerator()
    rng = draw_stream(seed)
    pos = 0
    out = []
    for _ in range(count):
        chunk = gen.generate(rng, pos, 0).decode("ascii")
        out.append(chunk)
        pos += len(chunk)
    return out


def test_tables() -> None:
    assert len(WORD_LENGTH_THRESHOLDS) == 15
    assert list(WORD_LENGTH_THRESHOLDS) == sorted(WORD_LENGTH_THRESHOLDS)
    assert len(SENTENCE_LENGTHS) == 64
    assert min(SENTENCE_LENGTHS) == 4
    assert max(SENTENCE_LENGTHS) == 30
    assert SENTENCE_LENGTHS[0] == 4
    assert SENTENCE_LENGTHS[27] == 10
    assert SENTENCE_LENGTHS[45] == 15
    assert SENTENCE_LENGTHS[63] == 25


def test_first_paragraph_has_no_separator() -> None:
    first, second = _paragraphs(3, 2)
    assert first[0].isupper()
    assert second.startswith("\n")
    assert second[1].isupper()


def test_paragraph_structure() -> None:
    for para in _paragraphs(11, 40):
        assert _ALLOWED.match(para)
        assert para.endswith(".\n")
        body = para.lstrip("\n")
        lines = body.split("\n")[:-1]
        assert all(0 < len(line) <= 80 for line in lines)
        assert all(not line.startswith(" ") and not line.endswith(" ") for line in lines)
        assert "  " not in body

        words = body.split()
        sentences: list[list[str]] = [[]]
        for word in words:
            sentences[-1].append(word)
            if word.endswith("."):
                sentences.append([])
        sentences.pop()
        assert 5 <= len(sentences) <= 12
        for sentence in sentences:
            assert 4 <= len(sentence) <= 30
            assert sentence[0][0].isupper()
            assert sentence[-1].endswith(".")
            for i, word in enumerate(sentence):
                letters = word.rstrip(".")
                assert 1 <= len(letters) <= 16
                tail = letters[1:] if i == 0 else letters
                assert tail == tail.lower()


def test_wrap_is_greedy() -> None:
    for para in _paragraphs(5, 20):
        lines = para.strip("\n").split("\n")
        for line, following in zip(lines, lines[1:]):
            next_word = following.split(" ")[0]
            assert len(line) + 1 + len(next_word) > 80


def test_ignores_remaining_length() -> None:
    gen = TextGenerator()
    a = gen.generate(draw_stream(4), 0, 1)
    b = gen.generate(draw_stream(4), 0, 10**9)
    assert a == b
    assert len(a) > 1


def test_stream_text_lines_fit_width() -> None:
    data = Reader("text", 42, 50_000, jitter=False).readall()
    text = data.decode("ascii")
    assert len(data) == 50_000
    assert _ALLOWED.match(text)
    assert all(len(line) <= 80 for line in text.split("\n"))
    assert "\n\n" in text
