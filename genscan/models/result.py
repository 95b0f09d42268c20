"""매칭/집계 결과 모델"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from pydantic import BaseModel, Field

from .candidate import Candidate, MatchQuality, UnmatchedReason


@dataclass
class MatchOutcome:
    """Matcher 선택 결과"""
    candidate: Candidate
    quality: MatchQuality


@dataclass
class MatchedResult:
    """매칭 성공 행"""
    product: str
    cleaned_key: str
    candidate: Candidate
    quality: MatchQuality

    @property
    def matched(self) -> bool:
        return True


@dataclass
class UnmatchedResult:
    """매칭 실패 행"""
    product: str
    cleaned_key: str
    reason: UnmatchedReason
    candidate_count: int = 0

    @property
    def matched(self) -> bool:
        return False


ProcessResult = Union[MatchedResult, UnmatchedResult]


@dataclass
class IngredientStats:
    """성분 그룹별 집계"""
    generic_count: int = 0
    min_permit_date: str = ""
    product_names: list[str] = field(default_factory=list)   # 최초 등장 순서
    original_names: list[str] = field(default_factory=list)

    @property
    def product_count(self) -> int:
        return len(self.product_names)

    def is_original(self, product_name: str) -> bool:
        return product_name in self.original_names


class FinalRow(BaseModel):
    """최종 출력 행 (입력 1행당 1행)"""

    product: str
    original_flag: str = Field("X", description="오리지널 여부 (O/X)")
    generic_count: int = Field(0, ge=0)
    ingredient: str = ""
    ingredient_eng: str = ""
    item_name: str = Field("", description="동일 성분 그룹의 제품명 목록 (콤마 구분)")
    sequence_tag: Optional[str] = None
    match_quality: Optional[MatchQuality] = None


class UnmatchedRow(BaseModel):
    """미매칭 목록 행"""

    product: str
    cleaned_key: str
    reason: UnmatchedReason
    candidate_count: int = 0
    sequence_tag: Optional[str] = None


@dataclass
class BuildResult:
    """Result Builder 출력"""
    final_rows: list[FinalRow] = field(default_factory=list)
    unmatched_rows: list[UnmatchedRow] = field(default_factory=list)

    @property
    def matched_count(self) -> int:
        return len(self.final_rows) - len(self.unmatched_rows)
