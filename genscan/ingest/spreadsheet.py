"""입력 엑셀/CSV → InputRow 목록"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import pandas as pd

from genscan.models import InputRow

logger = logging.getLogger(__name__)

PRODUCT_COLUMNS = ["제품명", "품명", "product", "Product", "PRODUCT"]
SEQUENCE_COLUMNS = ["순번", "sequence", "No", "NO"]


def _pick_column(df: pd.DataFrame, names: list[str]) -> Optional[str]:
    for name in names:
        if name in df.columns:
            return name
    return None


def rows_from_dataframe(df: pd.DataFrame) -> list[InputRow]:
    """
    DataFrame → InputRow

    제품명 컬럼을 이름으로 찾고, 없으면 첫 번째 컬럼을 사용.
    제품명이 비어 있는 행도 그대로 유지 (출력 행 수 = 입력 행 수)
    """
    if df.empty:
        return []

    product_col = _pick_column(df, PRODUCT_COLUMNS) or df.columns[0]
    seq_col = _pick_column(df, SEQUENCE_COLUMNS)

    rows = []
    for record in df.to_dict(orient="records"):
        product = record.get(product_col)
        seq = record.get(seq_col) if seq_col else None
        rows.append(
            InputRow(
                product="" if pd.isna(product) else str(product),
                sequence_tag=None if seq is None or pd.isna(seq) else str(seq),
            )
        )
    return rows


def read_input_rows(path: str | Path) -> list[InputRow]:
    """입력 파일 읽기 (.xlsx/.xls/.csv)"""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    if path.suffix.lower() == ".csv":
        df = pd.read_csv(path, dtype=str, encoding="utf-8-sig")
    else:
        df = pd.read_excel(path, dtype=str)

    rows = rows_from_dataframe(df)
    logger.info(f"입력 {len(rows)}행 ({path.name})")
    return rows
