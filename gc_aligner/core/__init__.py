"""
Core modules for text alignment.
"""

from .aligner import GaleChurchAligner
from .splitter import SentenceSplitter
from .punctuation import PunctuationHandler

__all__ = [
    "GaleChurchAligner",
    "SentenceSplitter",
    "PunctuationHandler",
]
