"""Alignment algorithm module

Cost model, six-way DP engine, paragraph correction and sentence alignment.
"""

from .base import AlignableUnit, DPCell, ParagraphRun, paragraph_runs
from .cost import GaleChurchCostModel, cost
from .engine import AlignmentEngine, AlignmentTable
from .paragraph import ParagraphCorrection, ParagraphCorrector
from .sentence import BlockAlignment, SentenceAligner, SentenceAlignmentResult

__all__ = [
    "AlignableUnit",
    "DPCell",
    "ParagraphRun",
    "paragraph_runs",
    "GaleChurchCostModel",
    "cost",
    "AlignmentEngine",
    "AlignmentTable",
    "ParagraphCorrection",
    "ParagraphCorrector",
    "BlockAlignment",
    "SentenceAligner",
    "SentenceAlignmentResult",
]
