"""
In-memory bilingual text store.

BilingualCorpus keeps two ordered unit sequences (source and target) keyed by
monotonically assigned integers and implements the TextStore interface the
aligner works against. It also loads plain text: paragraphs are split into
sentences, and each sentence becomes a unit tagged with its paragraph index.
"""

from typing import Dict, Iterable, List, Optional, Set, Tuple
from dataclasses import dataclass, field
import hashlib
import logging

from .alignment.base import ParagraphRun, paragraph_runs
from .core.splitter import SentenceSplitter
from .models import InvalidConnectionError, InvalidKeyError, Side
from .store import DocumentState, TextStore


PARAGRAPH_MODES = ("line", "blank")


@dataclass
class Unit:
    """One sentence of the source or target text"""

    key: int
    side: Side
    text: str
    paragraph_id: int = 0
    edges: Set[int] = field(default_factory=set)
    hash_value: str = ""

    def __post_init__(self):
        if not self.hash_value:
            self.hash_value = hashlib.sha256(
                self.text.strip().encode("utf-8")
            ).hexdigest()

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def is_source(self) -> bool:
        return self.side is Side.SOURCE


class BilingualCorpus(TextStore):
    """Ordered source/target units with cross-side edges"""

    def __init__(self, splitter: Optional[SentenceSplitter] = None):
        self.splitter = splitter or SentenceSplitter()
        self.units: Dict[int, Unit] = {}
        self._keys: Dict[Side, List[int]] = {Side.SOURCE: [], Side.TARGET: []}
        self._next_key = 0
        self._state = DocumentState()
        self.logger = logging.getLogger(__name__)

    def __len__(self):
        return len(self.units)

    def __contains__(self, key):
        return key in self.units

    # ---- unit management ----

    def add(self, side: Side, text: str, paragraph_id: int = 0) -> int:
        """Append a unit to one side and return its key"""
        return self.insert(side, len(self._keys[side]), text, paragraph_id)

    def insert(self, side: Side, index: int, text: str, paragraph_id: int = 0) -> int:
        """Insert a unit at a position of one side and return its key"""
        if paragraph_id < 0:
            raise ValueError(f"paragraph_id must be non-negative, got {paragraph_id}")
        key = self._next_key
        self._next_key += 1
        self.units[key] = Unit(key=key, side=side, text=text, paragraph_id=paragraph_id)
        self._keys[side].insert(index, key)
        return key

    def remove(self, key: int):
        """Remove a unit and its edges. The key is never handed out again."""
        unit = self.get(key)
        for other in list(unit.edges):
            self.units[other].edges.discard(key)
        self._keys[unit.side].remove(key)
        del self.units[key]

    def get(self, key: int, side: Optional[Side] = None) -> Unit:
        unit = self.units.get(key)
        if unit is None or (side is not None and unit.side is not side):
            raise InvalidKeyError(key, side)
        return unit

    def text(self, key: int) -> str:
        return self.get(key).text

    def paragraph_runs(self, side: Side) -> List[ParagraphRun]:
        return paragraph_runs(self, side)

    # ---- TextStore ----

    @property
    def alignment_state(self) -> DocumentState:
        return self._state

    def reset_alignment(self):
        """Drop all edges and return the document to NOT_ALIGNED.

        Paragraph ids rewritten by a previous correction are kept.
        """
        self.clear_edges()
        self._state = DocumentState()

    def length(self, side: Side, key: int) -> int:
        return self.get(key, side).length

    def paragraph_id(self, side: Side, key: int) -> int:
        return self.get(key, side).paragraph_id

    def set_paragraph_id(self, side: Side, key: int, paragraph_id: int) -> None:
        if paragraph_id < 0:
            raise ValueError(f"paragraph_id must be non-negative, got {paragraph_id}")
        self.get(key, side).paragraph_id = paragraph_id

    def ordered_keys(self, side: Side) -> List[int]:
        return list(self._keys[side])

    def add_edge(self, source_key: int, target_key: int) -> bool:
        first = self.get(source_key)
        second = self.get(target_key)
        if first.side is second.side:
            raise InvalidConnectionError(source_key, target_key, first.side)

        # Edges are undirected; accept either argument order
        if second.key in first.edges:
            return False
        first.edges.add(second.key)
        second.edges.add(first.key)
        return True

    # ---- edges ----

    def remove_edge(self, key1: int, key2: int) -> bool:
        first = self.get(key1)
        second = self.get(key2)
        if second.key not in first.edges:
            return False
        first.edges.discard(second.key)
        second.edges.discard(first.key)
        return True

    def connections(self, key: int) -> Set[int]:
        return set(self.get(key).edges)

    def edges(self) -> List[Tuple[int, int]]:
        """All edges as (source key, target key), in source document order"""
        result = []
        for key in self._keys[Side.SOURCE]:
            targets = self.units[key].edges
            result.extend((key, other) for other in self._ordered(Side.TARGET, targets))
        return result

    def clear_edges(self):
        for unit in self.units.values():
            unit.edges.clear()

    def _ordered(self, side: Side, keys: Iterable[int]) -> List[int]:
        wanted = set(keys)
        return [key for key in self._keys[side] if key in wanted]

    # ---- loading ----

    @staticmethod
    def split_paragraphs(text: str, paragraph_mode: str = "line") -> List[str]:
        """Split raw text into paragraphs.

        "line": every non-empty line is a paragraph.
        "blank": blank lines separate paragraphs; wrapped lines are joined.
        """
        if paragraph_mode not in PARAGRAPH_MODES:
            raise ValueError(
                f"Unknown paragraph mode {paragraph_mode!r}, expected one of {PARAGRAPH_MODES}"
            )

        lines = [line.rstrip("\n\r") for line in text.splitlines()]
        if paragraph_mode == "line":
            return [line.strip() for line in lines if line.strip()]

        paragraphs, current = [], []
        for line in lines:
            if line.strip():
                current.append(line.strip())
            elif current:
                paragraphs.append(" ".join(current))
                current = []
        if current:
            paragraphs.append(" ".join(current))
        return paragraphs

    def load_text(self, side: Side, text: str, paragraph_mode: str = "line") -> int:
        """Append text to one side; returns the number of sentences added"""
        existing = self.paragraph_runs(side)
        first_id = existing[-1].paragraph_id + 1 if existing else 0

        added = 0
        for offset, paragraph in enumerate(self.split_paragraphs(text, paragraph_mode)):
            for sentence in self.splitter.split(paragraph):
                self.add(side, sentence, first_id + offset)
                added += 1
        return added

    def load_source(self, file_path: str, paragraph_mode: str = "line") -> int:
        with open(file_path, "r", encoding="utf-8") as f:
            return self.load_text(Side.SOURCE, f.read(), paragraph_mode)

    def load_target(self, file_path: str, paragraph_mode: str = "line") -> int:
        with open(file_path, "r", encoding="utf-8") as f:
            return self.load_text(Side.TARGET, f.read(), paragraph_mode)

    @classmethod
    def from_texts(
        cls, source_text: str, target_text: str, paragraph_mode: str = "line"
    ) -> "BilingualCorpus":
        corpus = cls()
        corpus.load_text(Side.SOURCE, source_text, paragraph_mode)
        corpus.load_text(Side.TARGET, target_text, paragraph_mode)
        return corpus

    @classmethod
    def from_lengths(
        cls, source: Iterable[Iterable[int]], target: Iterable[Iterable[int]]
    ) -> "BilingualCorpus":
        """Build a corpus of placeholder units from per-paragraph sentence lengths"""
        corpus = cls()
        for side, paragraphs in ((Side.SOURCE, source), (Side.TARGET, target)):
            for paragraph_id, lengths in enumerate(paragraphs):
                for length in lengths:
                    corpus.add(side, "x" * length, paragraph_id)
        return corpus
