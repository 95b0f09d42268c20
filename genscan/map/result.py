"""최종 결과표 생성

입력 행 순서대로 행별 매칭 결과와 성분 그룹 집계를 합쳐
최종 행(입력 1행당 1행)과 미매칭 목록을 만든다.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from genscan.models import (
    BuildResult,
    Candidate,
    FinalRow,
    IngredientStats,
    InputRow,
    MatchedResult,
    ProcessResult,
    UnmatchedRow,
)

from .aggregate import compute_aggregates, dedup_candidates
from .ingredient_group import IngredientGroupResolver
from .normalize import strip_dosage

logger = logging.getLogger(__name__)

ORIGINAL_FLAG = "O"
NOT_ORIGINAL_FLAG = "X"
NAME_SEPARATOR = ", "


def build_final_rows(
    outcomes: list[ProcessResult],
    input_rows: list[InputRow],
    full_pool: Iterable[Candidate],
) -> BuildResult:
    """
    최종 결과표 생성

    Args:
        outcomes: 입력 행별 매칭 결과 (input_rows와 같은 순서/길이)
        input_rows: 원본 입력 행 (순번 전달용)
        full_pool: 집계에 쓸 후보 풀 전체

    Returns:
        BuildResult(final_rows, unmatched_rows)
    """
    if len(outcomes) != len(input_rows):
        raise ValueError(
            f"outcomes({len(outcomes)})와 input_rows({len(input_rows)}) 길이가 다릅니다"
        )

    matched = [o for o in outcomes if isinstance(o, MatchedResult)]

    pool = list(full_pool)
    resolver = IngredientGroupResolver.from_pool(
        dedup_candidates(pool + [m.candidate for m in matched])
    )
    aggregates = compute_aggregates(matched, pool, resolver=resolver)

    result = BuildResult()
    for outcome, row in zip(outcomes, input_rows):
        if not isinstance(outcome, MatchedResult):
            result.unmatched_rows.append(
                UnmatchedRow(
                    product=outcome.product,
                    cleaned_key=outcome.cleaned_key,
                    reason=outcome.reason,
                    candidate_count=outcome.candidate_count,
                    sequence_tag=row.sequence_tag,
                )
            )
            result.final_rows.append(
                FinalRow(
                    product=outcome.product,
                    original_flag=NOT_ORIGINAL_FLAG,
                    sequence_tag=row.sequence_tag,
                )
            )
            continue

        candidate = outcome.candidate
        key = resolver.group_key(candidate)
        stats = aggregates.get(key) if key else None

        generic_count = 0
        original_flag = NOT_ORIGINAL_FLAG
        item_name = candidate.item_name
        if stats is not None:
            generic_count = stats.generic_count
            if stats.is_original(strip_dosage(candidate.item_name)):
                original_flag = ORIGINAL_FLAG
            item_name = NAME_SEPARATOR.join(stats.product_names)

        result.final_rows.append(
            FinalRow(
                product=outcome.product,
                original_flag=original_flag,
                generic_count=generic_count,
                ingredient=candidate.ingredient,
                ingredient_eng=candidate.ingredient_eng,
                item_name=item_name,
                sequence_tag=row.sequence_tag,
                match_quality=outcome.quality,
            )
        )

    logger.info(
        "결과 생성: 전체 %d행, 매칭 %d행, 미매칭 %d행",
        len(result.final_rows), result.matched_count, len(result.unmatched_rows),
    )
    return result


def find_stats_for(
    candidate: Candidate,
    full_pool: Iterable[Candidate],
) -> Optional[tuple[str, IngredientStats]]:
    """단일 품목의 그룹 키와 집계 (수동 매칭 확인용)"""
    pool = dedup_candidates(list(full_pool) + [candidate])
    resolver = IngredientGroupResolver.from_pool(pool)
    key = resolver.group_key(candidate)
    if not key:
        return None
    stats = compute_aggregates([], pool, resolver=resolver).get(key)
    if stats is None:
        return None
    return key, stats
