"""
Fingerprint matching (demo mode).

There is no biometric algorithm here. Fingerprint templates are opaque
strings and the "similarity" is fabricated:

  - identical strings score somewhere in [85, 98)
  - different strings score by comparing character-code checksums,
    clamped to [30, 85]

Handlers only see the FingerprintMatcher interface, so a real matcher
(minutiae extraction, NIST Bozorth3, a vendor SDK) can replace the
simulation without touching any route.
"""

import math
import random
from dataclasses import dataclass
from typing import Protocol

# Scores at or above this are a successful match. Fixed, not per call.
MATCH_THRESHOLD = 85

EXACT_MIN = 85.0
EXACT_MAX = 98.0
MISMATCH_FLOOR = 30
MISMATCH_CEILING = 85


class FingerprintMatcher(Protocol):
    def match(self, stored: str, provided: str) -> float:
        """Similarity percentage between a stored and a provided template."""
        ...


def checksum_similarity(stored: str, provided: str) -> int:
    """Difference of character-code sums, mod 100, clamped to [30, 85].

    Stable for a given pair, but not content-aware in any meaningful way."""
    diff = abs(sum(ord(c) for c in stored) - sum(ord(c) for c in provided)) % 100
    return max(MISMATCH_FLOOR, min(MISMATCH_CEILING, diff))


class SimulatedMatcher:
    """Random high score for identical templates, checksum heuristic otherwise."""

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()

    def match(self, stored: str, provided: str) -> float:
        if stored == provided:
            # uniform() can round up to the upper bound; keep it half-open
            return min(self._rng.uniform(EXACT_MIN, EXACT_MAX), math.nextafter(EXACT_MAX, 0))
        return float(checksum_similarity(stored, provided))


class DeterministicMatcher:
    """Same heuristic, but identical templates always get `exact_score`.
    Handy for demos and tests that need reproducible responses."""

    def __init__(self, exact_score: float = 95.0):
        if not EXACT_MIN <= exact_score < EXACT_MAX:
            raise ValueError(f"exact_score must be in [{EXACT_MIN}, {EXACT_MAX})")
        self.exact_score = exact_score

    def match(self, stored: str, provided: str) -> float:
        if stored == provided:
            return self.exact_score
        return float(checksum_similarity(stored, provided))


MATCHERS = {
    "simulated": SimulatedMatcher,
    "deterministic": DeterministicMatcher,
}


def build_matcher(name: str) -> FingerprintMatcher:
    try:
        return MATCHERS[name]()
    except KeyError:
        raise ValueError(f"Unknown matcher '{name}'. Choose one of: {', '.join(MATCHERS)}") from None


@dataclass
class MatchOutcome:
    """A matcher score plus the pass/fail decision."""

    percentage: float
    status: str
    threshold: int = MATCH_THRESHOLD

    @property
    def rounded(self) -> float:
        """Percentage with one decimal, as returned to clients."""
        return round(self.percentage, 1)

    @property
    def history_percentage(self) -> int:
        """Whole-number percentage, as written to the validation history."""
        return int(round(self.percentage))


def evaluate(matcher: FingerprintMatcher, stored: str, provided: str) -> MatchOutcome:
    percentage = matcher.match(stored, provided)
    status = "success" if percentage >= MATCH_THRESHOLD else "failed"
    return MatchOutcome(percentage=percentage, status=status)
