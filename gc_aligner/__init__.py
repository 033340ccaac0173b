"""
GC Aligner: Gale-Church length-based paragraph and sentence alignment.
"""

import logging

from .api import TextAligner, align_texts
from .corpus import BilingualCorpus
from .store import TextStore
from .models import (
    Side,
    OperationType,
    AlignmentStage,
    AlignmentError,
    InvalidKeyError,
    InvalidConnectionError,
)
from . import core

# Alignment module
from . import alignment
from .alignment import (
    AlignmentEngine,
    GaleChurchCostModel,
    ParagraphCorrector,
    SentenceAligner,
)
from .core import GaleChurchAligner, SentenceSplitter

__version__ = "0.1.0"
__all__ = [
    "TextAligner",
    "align_texts",
    "BilingualCorpus",
    "TextStore",
    "Side",
    "OperationType",
    "AlignmentStage",
    "AlignmentError",
    "InvalidKeyError",
    "InvalidConnectionError",
    "AlignmentEngine",
    "GaleChurchCostModel",
    "ParagraphCorrector",
    "SentenceAligner",
    "GaleChurchAligner",
    "SentenceSplitter",
    "core",
    "alignment",
]

# Configure default logging format to be minimal
_handler = logging.StreamHandler()
_handler.setFormatter(logging.Formatter("%(message)s"))
_logger = logging.getLogger("gc_aligner")
_logger.addHandler(_handler)
_logger.setLevel(logging.INFO)
