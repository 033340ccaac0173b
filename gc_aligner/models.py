"""Alignment data models

Enums and exception classes shared by the alignment engine, the text store
and the public API.
"""

from enum import Enum
from typing import Tuple


class Side(Enum):
    """Which of the two ordered unit sequences a unit belongs to"""

    SOURCE = "source"
    TARGET = "target"

    @property
    def other(self) -> "Side":
        return Side.TARGET if self is Side.SOURCE else Side.SOURCE


class OperationType(Enum):
    """Six alignment operations, valued (source_count, target_count).

    Declaration order is the tie-break priority used by the DP: when two
    candidates reach the same minimum cost, the one declared first wins.
    """

    SUBSTITUTION = (1, 1)
    DELETION = (1, 0)
    INSERTION = (0, 1)
    CONTRACTION = (2, 1)
    EXPANSION = (1, 2)
    MERGER = (2, 2)

    @property
    def source_count(self) -> int:
        return self.value[0]

    @property
    def target_count(self) -> int:
        return self.value[1]

    @property
    def code(self) -> str:
        """Two-character code, e.g. "21" for contraction"""
        return f"{self.value[0]}{self.value[1]}"

    @property
    def label(self) -> str:
        return f"{self.value[0]}:{self.value[1]}"

    @classmethod
    def from_code(cls, code) -> "OperationType":
        """Look up an operation by its code ("12", 12 or (1, 2))"""
        if isinstance(code, cls):
            return code
        if isinstance(code, tuple):
            return cls(code)
        text = str(code).zfill(2)
        for op in cls:
            if op.code == text:
                return op
        raise ValueError(f"Unknown alignment operation code: {code!r}")


class AlignmentStage(Enum):
    """Per-document alignment progress"""

    NOT_ALIGNED = "not_aligned"
    PARAGRAPHS_CORRECTED = "paragraphs_corrected"
    SENTENCES_ALIGNED = "sentences_aligned"


class AlignmentError(Exception):
    """Base class for errors raised by the aligner and its text store"""

    pass


class InvalidKeyError(AlignmentError, KeyError):
    """A unit key does not exist in the store (or not on the requested side)"""

    def __init__(self, key, side=None):
        self.key = key
        self.side = side
        where = f" on the {side.value} side" if side is not None else ""
        super().__init__(f"Unable to find unit with key {key}{where}")

    def __str__(self):
        # KeyError quotes its argument; keep the plain message
        return self.args[0]


class InvalidConnectionError(AlignmentError, ValueError):
    """An edge was requested between two units on the same side"""

    def __init__(self, key1: int, key2: int, side: Side):
        self.keys: Tuple[int, int] = (key1, key2)
        self.side = side
        super().__init__(
            f"Cannot connect units {key1} and {key2}: both are on the {side.value} side"
        )
