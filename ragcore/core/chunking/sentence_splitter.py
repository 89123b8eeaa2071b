"""
Paragraph and sentence splitting heuristics.

Basic mode ends a sentence at '.', '!' or '?' followed by whitespace.
Improved mode skips known abbreviations and only ends a sentence when the
next word starts with a capital letter.

Dependencies: re (stdlib)
System role: Text segmentation for the chunker
"""

import re

from ragcore.configs.chunking import SentenceSplitMode

_PARAGRAPH_BREAK = re.compile(r"\r\n\r\n|\n\n|\r\r")
_WORD = re.compile(r"\S+")
_SENTENCE_END = ".!?"

# Matched against words with trailing . ! ? stripped; dotted entries kept as written
ABBREVIATIONS = frozenset(
    abbr.lower()
    for abbr in (
        "Dr", "Mr", "Mrs", "Ms", "Prof", "Sr", "Jr", "Inc", "Ltd", "Co",
        "vs", "etc", "e.g", "i.e", "a.m", "p.m", "U.S.A", "U.K", "U.S",
        "No.", "Vol.", "Fig.", "pp.", "vs.", "approx.", "est.", "Ph.D",
        "M.D", "B.A", "M.A", "B.S", "M.S", "etc.",
    )
)


def split_paragraphs(text: str) -> list[str]:
    """Split on blank-line paragraph breaks; trimmed, blanks dropped."""
    return [p.strip() for p in _PARAGRAPH_BREAK.split(text) if p.strip()]


def split_sentences_basic(text: str) -> list[str]:
    """Split after . ! ? when followed by whitespace or end of text."""
    sentences: list[str] = []
    start = 0
    for i, ch in enumerate(text):
        if ch in _SENTENCE_END and (i == len(text) - 1 or text[i + 1].isspace()):
            sentence = text[start:i + 1].strip()
            if sentence:
                sentences.append(sentence)
            start = i + 1

    tail = text[start:].strip()
    if tail:
        sentences.append(tail)
    return sentences


def _is_abbreviation(word: str) -> bool:
    bare = word.rstrip(_SENTENCE_END)
    if not bare:
        return False
    if bare.lower() in ABBREVIATIONS:
        return True
    # Short capitalised tokens ("St.", "Jan.", "A.") are treated as abbreviations
    return len(bare) <= 3 and bare[0].isupper()


def split_sentences_improved(text: str) -> list[str]:
    """Abbreviation-aware split; words are re-joined with single spaces."""
    words = _WORD.findall(text)
    sentences: list[str] = []
    current: list[str] = []

    for i, word in enumerate(words):
        current.append(word)
        if not word.endswith(tuple(_SENTENCE_END)):
            continue
        next_is_capital = i < len(words) - 1 and words[i + 1][0].isupper()
        if next_is_capital and not _is_abbreviation(word):
            sentences.append(" ".join(current))
            current = []

    if current:
        sentences.append(" ".join(current))
    return sentences


def split_sentences(text: str, mode: SentenceSplitMode = SentenceSplitMode.BASIC) -> list[str]:
    if mode == SentenceSplitMode.IMPROVED:
        return split_sentences_improved(text)
    return split_sentences_basic(text)
