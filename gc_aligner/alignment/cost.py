"""Gale-Church length-based cost model

The cost of aligning text spans of lengths ``len1`` and ``len2`` is the
negative log probability (scaled by 100) that a translation of ``len1``
characters has ``len2`` characters, under the assumption that the length
difference is normally distributed, plus a fixed penalty that reflects how
rare the operation type is.

Example:
    >>> cost(100, 100, OperationType.SUBSTITUTION)
    0
    >>> cost(0, 0, OperationType.DELETION)
    450
"""

from math import exp, log, sqrt
import logging

from ..models import OperationType


class GaleChurchCostModel:
    """Integer cost function over (len1, len2, operation type).

    Configuration parameters (keyword config, class defaults below):
    - char_ratio: expected target characters per source character (c)
    - variance: variance of the length difference per character (s^2)
    - penalty_indel / penalty_contraction / penalty_merger: type penalties
    - big_distance: cost used when the match probability underflows to zero
    """

    CHAR_RATIO = 1.0
    VARIANCE = 6.8
    PENALTY_INDEL = 450  # 1-0 and 0-1
    PENALTY_CONTRACTION = 230  # 2-1 and 1-2
    PENALTY_MERGER = 440  # 2-2 and anything unrecognised
    BIG_DISTANCE = 2500

    # Abramowitz-Stegun 26.2.17
    _P = 0.2316419
    _B = (0.319381530, -0.356563782, 1.781477937, -1.821255978, 1.330274429)
    _DENSITY = 0.3989423  # 1 / sqrt(2 * pi)

    def __init__(self, **config):
        self.config = config
        self.logger = logging.getLogger(__name__)

        self.char_ratio = float(config.get("char_ratio", self.CHAR_RATIO))
        self.variance = float(config.get("variance", self.VARIANCE))
        self.big_distance = int(config.get("big_distance", self.BIG_DISTANCE))

        if self.char_ratio <= 0:
            raise ValueError(f"char_ratio must be positive, got {self.char_ratio}")
        if self.variance <= 0:
            raise ValueError(f"variance must be positive, got {self.variance}")

        indel = int(config.get("penalty_indel", self.PENALTY_INDEL))
        contraction = int(config.get("penalty_contraction", self.PENALTY_CONTRACTION))
        self.penalty_merger = int(config.get("penalty_merger", self.PENALTY_MERGER))
        self.penalties = {
            OperationType.SUBSTITUTION: 0,
            OperationType.DELETION: indel,
            OperationType.INSERTION: indel,
            OperationType.CONTRACTION: contraction,
            OperationType.EXPANSION: contraction,
            OperationType.MERGER: self.penalty_merger,
        }

    def __repr__(self):
        return (
            f"GaleChurchCostModel(c={self.char_ratio}, s2={self.variance}, "
            f"penalties={[self.penalties[op] for op in OperationType]})"
        )

    def delta(self, len1: int, len2: int) -> float:
        """Standardised length difference"""
        mean = (len1 + len2 / self.char_ratio) / 2
        return (len2 - len1 * self.char_ratio) / sqrt(mean * self.variance)

    @classmethod
    def pnorm(cls, x: float) -> float:
        """Standard normal CDF for x >= 0 (rational approximation)"""
        t = 1 / (1 + cls._P * x)
        b1, b2, b3, b4, b5 = cls._B
        poly = ((((b5 * t + b4) * t + b3) * t + b2) * t + b1) * t
        return 1 - cls._DENSITY * exp(-x * x / 2) * poly

    def match(self, len1: int, len2: int) -> int:
        """Length-ratio term, without the type penalty"""
        if len1 == 0 and len2 == 0:
            return 0

        delta = abs(self.delta(len1, len2))
        probability = 2 * (1 - self.pnorm(delta))

        if probability > 0:
            # int() truncates toward zero, so p slightly above 1 yields 0
            return int(-100 * log(probability))
        return self.big_distance

    def penalty(self, op) -> int:
        """Fixed penalty for an operation; unknown values get the 2-2 penalty"""
        if not isinstance(op, OperationType):
            try:
                op = OperationType.from_code(op)
            except ValueError:
                return self.penalty_merger
        return self.penalties[op]

    def cost(self, len1: int, len2: int, op) -> int:
        return self.match(len1, len2) + self.penalty(op)


_DEFAULT_MODEL = GaleChurchCostModel()


def cost(len1: int, len2: int, op) -> int:
    """Cost under the default Gale-Church parameters"""
    return _DEFAULT_MODEL.cost(len1, len2, op)
