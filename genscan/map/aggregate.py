"""성분 그룹별 오리지널/제네릭 집계

후보 풀 **전체**(매칭된 행만이 아님)를 대상으로 성분 그룹마다
- 함량 정규화 제품명 목록 (최초 등장 순)
- 그룹 최초 허가일
- 오리지널 제품명 집합
- 제네릭 수 = 고유 제품명 수 − 오리지널 수
를 계산한다.

오리지널 판정:
1. 그룹 내 신약 구분(is_new_drug) 표시 품목이 있으면 그 제품명들
2. 없으면 최초 허가일과 같은 날 허가된 제품명들
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from genscan.models import (
    UNKNOWN_PERMIT_DATE,
    Candidate,
    IngredientStats,
    MatchedResult,
)

from .ingredient_group import IngredientGroupResolver
from .normalize import strip_dosage

logger = logging.getLogger(__name__)


def identity_key(candidate: Candidate) -> str:
    """중복 제거 키: 품목기준코드 → 허가번호 → 객체 식별자"""
    if candidate.item_seq:
        return f"seq:{candidate.item_seq}"
    if candidate.permit_no:
        return f"permit:{candidate.permit_no}"
    return f"obj:{id(candidate)}"


def dedup_candidates(pool: Iterable[Candidate]) -> list[Candidate]:
    """
    후보 풀 중복 제거 (먼저 나온 품목 유지)

    같은 품목이 서로 다른 검색에서 두 번 반환돼도 한 번만 센다.
    식별 키가 없는 품목은 각각 별개로 유지한다.
    """
    seen: set[str] = set()
    unique = []
    for candidate in pool:
        key = identity_key(candidate)
        if key in seen:
            continue
        seen.add(key)
        unique.append(candidate)
    return unique


@dataclass
class _GroupAccumulator:
    """그룹 집계 중간 상태"""
    name_dates: dict[str, str] = field(default_factory=dict)  # 제품명 → 최초 허가일 (삽입 순서 유지)
    min_date: str = UNKNOWN_PERMIT_DATE
    new_drug_names: dict[str, None] = field(default_factory=dict)

    def add(self, name: str, permit_date: str, is_new_drug: bool) -> None:
        known = self.name_dates.get(name)
        if known is None or permit_date < known:
            self.name_dates[name] = permit_date
        if permit_date < self.min_date:
            self.min_date = permit_date
        if is_new_drug:
            self.new_drug_names[name] = None

    def original_names(self) -> list[str]:
        if self.new_drug_names:
            return list(self.new_drug_names)
        return [name for name, dt in self.name_dates.items() if dt == self.min_date]

    def to_stats(self) -> IngredientStats:
        originals = self.original_names()
        # 오리지널은 최소 1건으로 계산
        original_count = max(len(originals), 1)
        generic_count = max(len(self.name_dates) - original_count, 0)
        return IngredientStats(
            generic_count=generic_count,
            min_permit_date=self.min_date,
            product_names=list(self.name_dates),
            original_names=originals,
        )


def compute_aggregates(
    matched_results: Iterable[MatchedResult],
    full_pool: Iterable[Candidate],
    resolver: Optional[IngredientGroupResolver] = None,
) -> dict[str, IngredientStats]:
    """
    성분 그룹별 집계

    Args:
        matched_results: 매칭 성공 행 (풀에 없는 매칭 품목은 풀에 추가)
        full_pool: 후보 풀 전체
        resolver: 미리 만든 resolver (없으면 풀에서 생성)

    Returns:
        {그룹 키: IngredientStats}
    """
    pool = list(full_pool)
    pool.extend(r.candidate for r in matched_results if r.matched)
    candidates = dedup_candidates(pool)

    if resolver is None:
        resolver = IngredientGroupResolver.from_pool(candidates)

    groups: dict[str, _GroupAccumulator] = {}
    for candidate in candidates:
        key = resolver.group_key(candidate)
        if not key:
            continue
        name = strip_dosage(candidate.item_name)
        if not name:
            continue
        groups.setdefault(key, _GroupAccumulator()).add(
            name, candidate.sort_date, candidate.is_new_drug
        )

    aggregates = {key: acc.to_stats() for key, acc in groups.items()}
    logger.debug(
        "집계 완료: 후보 %d건 → 고유 %d건, 성분 그룹 %d개",
        len(pool), len(candidates), len(aggregates),
    )
    return aggregates
