import re

from typing import List
from .punctuation import PunctuationHandler


class SentenceSplitter:
    """Language-independent sentence splitter for mixed Chinese-English text.

    Splits after . ! ? 。 ！ ？ (and any closing quotes/brackets that follow),
    but not inside quotes or brackets, except where the end mark directly
    precedes the closing quote and whitespace follows ("Stop." He left.).
    """

    SENTENCE_END_PATTERN = re.compile(r"[.!?。！？]")

    # Quote/bracket pairs (open → close)
    PAIRS = {
        '"': '"',
        "'": "'",
        "“": "”",
        "‘": "’",
        "「": "」",
        "『": "』",
        "(": ")",
        "（": "）",
        "[": "]",
        "【": "】",
        "《": "》",
    }
    OPENERS = set(PAIRS.keys())
    CLOSERS = set(PAIRS.values())

    @classmethod
    def _build_quote_context(cls, text: str) -> List[bool]:
        """
        in_quoted[i] is True when position i lies strictly inside a properly
        closed quote/bracket pair. Unpaired symbols are ignored.

        Symmetric quotes (opener == closer, like ") toggle: an occurrence
        closes the pair when the same symbol is on top of the stack.
        """
        n = len(text)
        in_quoted = [False] * n
        stack = []  # (opener, index)

        for i, char in enumerate(text):
            # Apostrophes inside words (Alya's) are not quotes
            if PunctuationHandler.is_between_ascii_letters(text, i):
                continue

            if char in cls.OPENERS and cls.PAIRS[char] == char:
                if stack and stack[-1][0] == char:
                    _, start = stack.pop()
                    for j in range(start + 1, i):
                        in_quoted[j] = True
                else:
                    stack.append((char, i))
            elif char in cls.OPENERS:
                stack.append((char, i))
            elif char in cls.CLOSERS and stack:
                opener, start = stack[-1]
                # Mismatched closers (「 ... ）) are ignored
                if cls.PAIRS[opener] == char:
                    stack.pop()
                    for j in range(start + 1, i):
                        in_quoted[j] = True

        return in_quoted

    @classmethod
    def split_points(cls, text: str) -> List[int]:
        """Offsets at which a new sentence starts (never 0 or len(text))"""
        if not text:
            return []
        in_quoted = cls._build_quote_context(text)
        points = []

        for match in cls.SENTENCE_END_PATTERN.finditer(text):
            i = match.start()
            if PunctuationHandler.should_skip_for_splitting(text, i):
                continue

            # Extend past closing symbols (？」 or ." )
            pos = match.end()
            while pos < len(text) and text[pos] in cls.CLOSERS:
                pos += 1

            if in_quoted[i]:
                closed_here = pos > match.end()
                if not closed_here or pos >= len(text) or not text[pos].isspace():
                    continue

            if 0 < pos < len(text) and (not points or points[-1] != pos):
                points.append(pos)

        return points

    @classmethod
    def split(cls, text: str) -> List[str]:
        """Split text into stripped, non-empty sentences"""
        if not text.strip():
            return []

        sentences = []
        prev = 0
        for point in cls.split_points(text):
            sentence = text[prev:point].strip()
            if sentence:
                sentences.append(sentence)
            prev = point
        remaining = text[prev:].strip()
        if remaining:
            sentences.append(remaining)
        return sentences
