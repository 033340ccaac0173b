import logging
from typing import Optional, Set

from ..alignment.engine import AlignmentEngine
from ..alignment.paragraph import ParagraphCorrection, ParagraphCorrector
from ..alignment.sentence import SentenceAligner, SentenceAlignmentResult
from ..models import AlignmentStage


class GaleChurchAligner:
    """Paragraph-then-sentence aligner bound to one text store.

    The document moves through three stages:

        NOT_ALIGNED -> PARAGRAPHS_CORRECTED -> SENTENCES_ALIGNED

    The stage is kept in ``store.alignment_state``, so it holds for every
    aligner built on the same store. Paragraph correction runs only from
    NOT_ALIGNED, and sentence alignment only once. Calls made out of order
    are no-ops that return None; callers that want a hard failure should
    check ``stage`` themselves.

    Args:
        store: a ``TextStore`` (e.g. ``BilingualCorpus``)
        **config: cost model overrides (char_ratio, variance, penalties)

    Example:
        >>> aligner = GaleChurchAligner(corpus)
        >>> aligner.align()
        >>> corpus.edges()
    """

    def __init__(self, store, **config):
        self.store = store
        self.config = config
        self.engine = AlignmentEngine(**config)
        self.logger = logging.getLogger(__name__)

    @property
    def stage(self) -> AlignmentStage:
        return self.store.alignment_state.stage

    @property
    def sentence_alignment_done(self) -> bool:
        return self.stage is AlignmentStage.SENTENCES_ALIGNED

    @property
    def deleted_paragraphs(self) -> Set[int]:
        return set(self.store.alignment_state.deleted_paragraphs)

    @property
    def inserted_paragraphs(self) -> Set[int]:
        return set(self.store.alignment_state.inserted_paragraphs)

    def align_paragraphs(self) -> Optional[ParagraphCorrection]:
        """Reconcile paragraph boundaries; no-op unless nothing has run yet"""
        return ParagraphCorrector(self.store, engine=self.engine).run()

    def align_sentences(self) -> Optional[SentenceAlignmentResult]:
        """Align sentences block by block; no-op after the first call"""
        return SentenceAligner(self.store, engine=self.engine).run()

    def align(self, correct_paragraphs: bool = True):
        """Run both passes; returns (paragraph correction, sentence result)"""
        correction = self.align_paragraphs() if correct_paragraphs else None
        return correction, self.align_sentences()
