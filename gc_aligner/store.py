"""Text store interface

The aligner reads unit lengths and paragraph ids through this interface and
writes back only edges and paragraph renumbering. ``BilingualCorpus`` in
``gc_aligner.corpus`` is the in-memory implementation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Sequence, Set

from .models import AlignmentStage, Side


@dataclass
class DocumentState:
    """Alignment progress of one document, kept with its store.

    The passes read and advance ``stage`` so that paragraph correction and
    sentence alignment each run at most once per document, whichever aligner
    object drives them. The last pass results are kept for reporting.
    """

    stage: AlignmentStage = AlignmentStage.NOT_ALIGNED
    deleted_paragraphs: Set[int] = field(default_factory=set)
    inserted_paragraphs: Set[int] = field(default_factory=set)
    paragraph_correction: Any = None
    sentence_alignment: Any = None


class TextStore(ABC):
    """Two ordered unit sequences (source and target) with cross-side edges"""

    @property
    @abstractmethod
    def alignment_state(self) -> DocumentState:
        """Per-document alignment stage and paragraph skip sets"""
        raise NotImplementedError

    @abstractmethod
    def length(self, side: Side, key: int) -> int:
        """Character length of a unit

        Raises:
            InvalidKeyError: key is not on the given side
        """
        raise NotImplementedError

    @abstractmethod
    def paragraph_id(self, side: Side, key: int) -> int:
        raise NotImplementedError

    @abstractmethod
    def set_paragraph_id(self, side: Side, key: int, paragraph_id: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def ordered_keys(self, side: Side) -> Sequence[int]:
        """Unit keys of one side in document order"""
        raise NotImplementedError

    @abstractmethod
    def add_edge(self, source_key: int, target_key: int) -> bool:
        """Connect a source unit and a target unit.

        Idempotent: returns False when the edge already exists.

        Raises:
            InvalidKeyError: a key does not exist
            InvalidConnectionError: both keys are on the same side
        """
        raise NotImplementedError
