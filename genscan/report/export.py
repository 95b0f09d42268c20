"""결과 내보내기 (엑셀/CSV)

시트 1: 결과 (입력 1행당 1행)
시트 2: 미매칭 목록
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from genscan.models import BuildResult

logger = logging.getLogger(__name__)

RESULT_COLUMNS = {
    "sequence_tag": "순번",
    "product": "제품명",
    "original_flag": "오리지널여부",
    "generic_count": "제네릭수",
    "ingredient": "주성분",
    "ingredient_eng": "주성분영문",
    "item_name": "식약처제품명",
    "match_quality": "매칭품질",
}

UNMATCHED_COLUMNS = {
    "sequence_tag": "순번",
    "product": "제품명",
    "cleaned_key": "검색키",
    "reason": "사유",
    "candidate_count": "후보수",
}


def to_dataframes(result: BuildResult) -> tuple[pd.DataFrame, pd.DataFrame]:
    """BuildResult → (결과 DataFrame, 미매칭 DataFrame)"""
    final = pd.DataFrame(
        [row.model_dump(mode="json") for row in result.final_rows],
        columns=list(RESULT_COLUMNS),
    ).rename(columns=RESULT_COLUMNS)

    unmatched = pd.DataFrame(
        [row.model_dump(mode="json") for row in result.unmatched_rows],
        columns=list(UNMATCHED_COLUMNS),
    ).rename(columns=UNMATCHED_COLUMNS)

    return final, unmatched


def export_result(result: BuildResult, path: str | Path) -> Path:
    """
    결과 저장

    Args:
        result: build_final_rows 결과
        path: .xlsx (2개 시트) 또는 .csv (미매칭은 *_unmatched.csv 로 별도 저장)

    Returns:
        저장된 결과 파일 경로
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    final, unmatched = to_dataframes(result)

    if path.suffix.lower() == ".csv":
        final.to_csv(path, index=False, encoding="utf-8-sig")
        unmatched_path = path.with_name(f"{path.stem}_unmatched.csv")
        unmatched.to_csv(unmatched_path, index=False, encoding="utf-8-sig")
    else:
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            final.to_excel(writer, sheet_name="결과", index=False)
            unmatched.to_excel(writer, sheet_name="미매칭", index=False)

    logger.info(f"결과 저장: {path} ({len(final)}행, 미매칭 {len(unmatched)}행)")
    return path
