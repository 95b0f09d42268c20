"""데이터 모델"""

from .candidate import (
    UNKNOWN_PERMIT_DATE,
    Candidate,
    InputRow,
    MatchQuality,
    UnmatchedReason,
)
from .result import (
    BuildResult,
    FinalRow,
    IngredientStats,
    MatchedResult,
    MatchOutcome,
    ProcessResult,
    UnmatchedResult,
    UnmatchedRow,
)

__all__ = [
    "UNKNOWN_PERMIT_DATE",
    "Candidate",
    "InputRow",
    "MatchQuality",
    "UnmatchedReason",
    "BuildResult",
    "FinalRow",
    "IngredientStats",
    "MatchedResult",
    "MatchOutcome",
    "ProcessResult",
    "UnmatchedResult",
    "UnmatchedRow",
]
