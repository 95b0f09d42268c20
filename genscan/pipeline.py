"""처리 엔진

입력 행 → 검색 키 정리 → 후보 공급자 조회(고유 키당 1회) → 행별 매칭/미매칭 분류
→ (run_batch) 전체 풀 집계 → 최종 결과표

후보 공급자는 `(검색어) -> list[Candidate]` 호출 가능 객체면 되고,
동기/비동기 모두 지원한다 (MFDSLocalDataset, MFDSRemoteSupplier 등).
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Iterable, Optional, Union

from genscan.map import (
    build_final_rows,
    clean_product_name,
    dedup_candidates,
    find_best_match,
    is_korean,
)
from genscan.models import (
    BuildResult,
    Candidate,
    InputRow,
    MatchedResult,
    ProcessResult,
    UnmatchedReason,
    UnmatchedResult,
)

logger = logging.getLogger(__name__)

CandidateSupplier = Callable[[str], Union[list[Candidate], Awaitable[list[Candidate]]]]
ProgressCallback = Callable[[int, int], Any]


@dataclass
class UniqueKeys:
    """입력 행별 정리 키와 고유 키 (번역 검토 단계용)"""
    cleaned_keys: list[str] = field(default_factory=list)
    unique_keys: list[str] = field(default_factory=list)
    eng_keys: list[str] = field(default_factory=list)


def get_unique_keys(rows: Iterable[InputRow]) -> UniqueKeys:
    """정리 키 목록, 고유 키(등장 순), 그중 영문 키"""
    cleaned = [clean_product_name(r.product) for r in rows]
    unique = list(dict.fromkeys(cleaned))
    eng = [k for k in unique if k and not is_korean(k)]
    return UniqueKeys(cleaned_keys=cleaned, unique_keys=unique, eng_keys=eng)


async def _call_supplier(supplier: CandidateSupplier, term: str) -> list[Candidate]:
    result = supplier(term)
    if inspect.isawaitable(result):
        result = await result
    return list(result or [])


def classify(key: str, product: str, candidates: Optional[list[Candidate]]) -> ProcessResult:
    """
    단일 행 분류

    Args:
        key: 정리된 검색 키
        product: 원본 입력 제품명
        candidates: 공급자 결과 (None이면 공급자 오류)
    """
    if not key:
        return UnmatchedResult(product, key, UnmatchedReason.NO_RESULT, 0)

    if candidates is None:
        return UnmatchedResult(product, key, UnmatchedReason.SOURCE_ERROR, 0)

    if not candidates:
        reason = (
            UnmatchedReason.NO_RESULT if is_korean(key)
            else UnmatchedReason.NO_RESULT_ENGLISH
        )
        return UnmatchedResult(product, key, reason, 0)

    outcome = find_best_match(key, candidates)
    if outcome is None:
        return UnmatchedResult(product, key, UnmatchedReason.AMBIGUOUS, len(candidates))

    if not outcome.candidate.has_ingredient:
        return UnmatchedResult(product, key, UnmatchedReason.NO_INGREDIENT, len(candidates))

    return MatchedResult(product, key, outcome.candidate, outcome.quality)


async def _search_keys(
    search_keys: list[str],
    supplier: CandidateSupplier,
    translations: dict[str, str],
    on_progress: Optional[ProgressCallback] = None,
) -> dict[str, Optional[list[Candidate]]]:
    """고유 키당 1회 공급자 조회 ({키: 후보 목록}, 공급자 오류는 None)"""
    cache: dict[str, Optional[list[Candidate]]] = {}
    total = len(search_keys)

    for done, key in enumerate(search_keys, start=1):
        term = translations.get(key, key) if not is_korean(key) else key
        try:
            cache[key] = await _call_supplier(supplier, term)
        except Exception as e:
            # 해당 키의 행만 SOURCE_ERROR
            logger.warning("후보 조회 실패 '%s': %s", term, e)
            cache[key] = None
        if on_progress:
            on_progress(done, total)

    return cache


def _classify_rows(
    keys: UniqueKeys,
    rows: list[InputRow],
    cache: dict[str, Optional[list[Candidate]]],
) -> list[ProcessResult]:
    results = [
        classify(key, row.product, cache.get(key, []))
        for key, row in zip(keys.cleaned_keys, rows)
    ]
    matched = sum(1 for r in results if r.matched)
    logger.info("매칭: %d/%d행 (고유 키 %d개)", matched, len(results), len(cache))
    return results


async def process_products(
    rows: list[InputRow],
    supplier: CandidateSupplier,
    confirmed_translations: Optional[dict[str, str]] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> list[ProcessResult]:
    """
    행별 매칭

    Args:
        rows: 입력 행
        supplier: 후보 공급자
        confirmed_translations: 검토 완료된 {영문 키: 한글 검색어}
        on_progress: (완료 키 수, 전체 키 수) 콜백

    Returns:
        입력 행과 같은 순서의 ProcessResult 목록
    """
    keys = get_unique_keys(rows)
    cache = await _search_keys(
        [k for k in keys.unique_keys if k], supplier,
        confirmed_translations or {}, on_progress,
    )
    return _classify_rows(keys, rows, cache)


async def run_batch(
    rows: list[InputRow],
    supplier: CandidateSupplier,
    full_pool: Optional[Iterable[Candidate]] = None,
    confirmed_translations: Optional[dict[str, str]] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> BuildResult:
    """
    매칭 + 집계 + 결과표 한 번에

    full_pool이 없으면 공급자의 `candidates`(로컬) 또는 `pool`(원격) 속성을 쓰고,
    둘 다 없으면 이번 실행에서 공급자가 반환한 후보 전체(중복 제거)를 풀로 사용
    """
    keys = get_unique_keys(rows)
    cache = await _search_keys(
        [k for k in keys.unique_keys if k], supplier,
        confirmed_translations or {}, on_progress,
    )
    outcomes = _classify_rows(keys, rows, cache)

    if full_pool is None:
        full_pool = getattr(supplier, "candidates", None)
    if full_pool is None:
        full_pool = getattr(supplier, "pool", None)
    if full_pool is None:
        full_pool = dedup_candidates(
            c for candidates in cache.values() if candidates for c in candidates
        )

    return build_final_rows(outcomes, rows, full_pool)
