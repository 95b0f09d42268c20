"""제품명 매칭 로직

정리된 검색 키와 후보 품목 목록에서 최적 품목 1건을 선택한다.

- 한글 키: 정리된 제품명 완전 일치
- 영문 키: 정리된 영문 제품명 완전 일치 → 부분 일치(포함/첫 단어)
- 위 풀이 있으면 EXACT, 없으면 전체 후보에서 선택하고 FUZZY
- 선택 기준은 항상 최초 허가일 (미상은 맨 뒤)
"""

from __future__ import annotations

import re
from typing import Optional

from genscan.models import Candidate, MatchOutcome, MatchQuality

from .cleaner import clean_product_name

_HANGUL_RE = re.compile(r"[\uAC00-\uD7AF]")


def is_korean(text: str) -> bool:
    """한글 음절 포함 여부"""
    return bool(text) and bool(_HANGUL_RE.search(text))


def earliest(candidates: list[Candidate]) -> Candidate:
    """허가일이 가장 빠른 품목 (동률이면 목록 순서상 앞)"""
    return min(candidates, key=lambda c: c.sort_date)


def _exact_korean(key: str, candidates: list[Candidate]) -> list[Candidate]:
    return [c for c in candidates if clean_product_name(c.item_name) == key]


def _exact_english(key: str, candidates: list[Candidate]) -> list[Candidate]:
    return [c for c in candidates if clean_product_name(c.item_name_eng) == key]


def _partial_english(key: str, candidates: list[Candidate]) -> list[Candidate]:
    pool = []
    for c in candidates:
        eng = clean_product_name(c.item_name_eng)
        if not eng:
            continue
        first_word = eng.split(" ")[0]
        if key in eng or first_word in key:
            pool.append(c)
    return pool


def find_best_match(
    cleaned_key: str,
    candidates: list[Candidate],
) -> Optional[MatchOutcome]:
    """
    최적 매칭 품목 선택

    Args:
        cleaned_key: clean_product_name 결과
        candidates: 후보 공급자가 반환한 품목 목록

    Returns:
        MatchOutcome (후보가 비어 있을 때만 None)
    """
    if not candidates:
        return None

    if is_korean(cleaned_key):
        pool = _exact_korean(cleaned_key, candidates)
    elif cleaned_key:
        pool = _exact_english(cleaned_key, candidates)
        if not pool:
            pool = _partial_english(cleaned_key, candidates)
    else:
        pool = []

    if pool:
        return MatchOutcome(candidate=earliest(pool), quality=MatchQuality.EXACT)

    return MatchOutcome(candidate=earliest(candidates), quality=MatchQuality.FUZZY)
