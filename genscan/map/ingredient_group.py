"""성분 그룹 키 결정 (영문 우선, 한글 fallback)

허가 데이터에는 같은 성분인데도 주성분영문이 비어 있는 품목이 섞여 있다.
영문/한글이 모두 있는 품목으로 한글 → 영문 교차참조표를 만들어,
한글만 있는 품목도 영문 기준 그룹으로 합친다.

    resolver = IngredientGroupResolver.from_pool(candidates)
    resolver.group_key(candidate)  # "PEMETREXED"
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable, Optional

from genscan.models import Candidate

from .normalize import normalize_ingredient_eng, normalize_ingredient_kor

logger = logging.getLogger(__name__)


def build_cross_reference(pool: Iterable[Candidate]) -> dict[str, str]:
    """
    한글 정규화 성분명 → 영문 그룹 키 교차참조표

    같은 한글 키가 서로 다른 영문 키와 짝지어진 경우(데이터 불일치),
    가장 많은 품목에서 관측된 영문 키를 쓰고 동률이면 풀 순서상 먼저 나온 키를 쓴다.

    Args:
        pool: 후보 품목 전체

    Returns:
        {한글 키: 영문 키}
    """
    votes: dict[str, Counter] = {}

    for candidate in pool:
        if not candidate.ingredient or not candidate.ingredient_eng:
            continue
        kor_key = normalize_ingredient_kor(candidate.ingredient)
        eng_key = normalize_ingredient_eng(candidate.ingredient_eng)
        if not kor_key or not eng_key:
            continue
        votes.setdefault(kor_key, Counter())[eng_key] += 1

    cross_ref = {}
    for kor_key, counter in votes.items():
        # most_common은 동률일 때 삽입 순서를 유지
        cross_ref[kor_key] = counter.most_common(1)[0][0]
        if len(counter) > 1:
            logger.debug(
                "교차참조 충돌: %s → %s (선택: %s)",
                kor_key, dict(counter), cross_ref[kor_key],
            )

    return cross_ref


def group_key(candidate: Candidate, cross_ref: Optional[dict[str, str]] = None) -> str:
    """
    품목의 성분 그룹 키

    Args:
        candidate: 허가 품목
        cross_ref: build_cross_reference 결과 (없으면 한글 키 그대로)

    Returns:
        그룹 키. 주성분 정보가 전혀 없으면 ""
    """
    if candidate.ingredient_eng:
        eng_key = normalize_ingredient_eng(candidate.ingredient_eng)
        if eng_key:
            return eng_key

    kor_key = normalize_ingredient_kor(candidate.ingredient)
    if not kor_key:
        return ""

    if cross_ref and kor_key in cross_ref:
        return cross_ref[kor_key]
    return kor_key


class IngredientGroupResolver:
    """풀 단위 교차참조표를 보관하는 그룹 키 resolver"""

    def __init__(self, cross_ref: Optional[dict[str, str]] = None):
        self.cross_ref: dict[str, str] = cross_ref or {}

    @classmethod
    def from_pool(cls, pool: Iterable[Candidate]) -> IngredientGroupResolver:
        return cls(build_cross_reference(pool))

    def group_key(self, candidate: Candidate) -> str:
        return group_key(candidate, self.cross_ref)

    def __len__(self) -> int:
        return len(self.cross_ref)
