"""Risk classification of tool source text.

This is a substring heuristic over the raw text, not a guarantee: it flags
code that mentions dangerous capabilities, and says nothing about code that
reaches them indirectly.
"""

from __future__ import annotations

from enum import Enum

from swarmthing.config.constants import MAX_SAFE_CODE_LENGTH

HIGH_RISK_TOKENS: tuple[str, ...] = (
    "write_file",
    "clone_agent",
    "start_server",
    # raw process invocation
    "subprocess",
    "os.system",
    "os.popen",
    "os.exec",
    "os.spawn",
    "pty.spawn",
)
MEDIUM_RISK_TOKENS: tuple[str, ...] = ("read_file", "scrape_url")
LOW_RISK_TOKENS: tuple[str, ...] = ("send_message",)


class SafetyLevel(str, Enum):
    SAFE = "Safe"
    LOW_RISK = "LowRisk"
    MEDIUM_RISK = "MediumRisk"
    HIGH_RISK = "HighRisk"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    # str comparisons would order the names alphabetically
    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SafetyLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, SafetyLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, SafetyLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, SafetyLevel):
            return NotImplemented
        return self.rank >= other.rank

    def __str__(self) -> str:
        return self.value


_RANKS = {level: i for i, level in enumerate(SafetyLevel)}


def classify(code: str) -> SafetyLevel:
    """Classify code by the most dangerous capability it mentions."""
    if len(code) > MAX_SAFE_CODE_LENGTH:
        return SafetyLevel.HIGH_RISK
    if any(token in code for token in HIGH_RISK_TOKENS):
        return SafetyLevel.HIGH_RISK
    if any(token in code for token in MEDIUM_RISK_TOKENS):
        return SafetyLevel.MEDIUM_RISK
    if any(token in code for token in LOW_RISK_TOKENS):
        return SafetyLevel.LOW_RISK
    return SafetyLevel.SAFE
