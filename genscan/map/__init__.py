"""제품명 정규화 · 매칭 · 집계 엔진

네트워크/파일 의존 없는 순수 함수 모음
"""

from .cleaner import ARTIFACT_TOKENS, clean, clean_product_name
from .normalize import (
    DOSAGE_UNITS,
    ENG_SALT_SUFFIXES,
    KOR_SALT_SUFFIXES,
    normalize_ingredient_eng,
    normalize_ingredient_kor,
    strip_dosage,
    strip_salts,
    strip_salts_eng,
    strip_salts_kor,
)
from .ingredient_group import (
    IngredientGroupResolver,
    build_cross_reference,
    group_key,
)
from .matcher import earliest, find_best_match, is_korean
from .aggregate import compute_aggregates, dedup_candidates, identity_key
from .result import build_final_rows, find_stats_for

__all__ = [
    # Name Cleaner
    "ARTIFACT_TOKENS",
    "clean",
    "clean_product_name",
    # Dosage / Salt
    "DOSAGE_UNITS",
    "ENG_SALT_SUFFIXES",
    "KOR_SALT_SUFFIXES",
    "normalize_ingredient_eng",
    "normalize_ingredient_kor",
    "strip_dosage",
    "strip_salts",
    "strip_salts_eng",
    "strip_salts_kor",
    # Ingredient Group
    "IngredientGroupResolver",
    "build_cross_reference",
    "group_key",
    # Matcher
    "earliest",
    "find_best_match",
    "is_korean",
    # Aggregator
    "compute_aggregates",
    "dedup_candidates",
    "identity_key",
    # Result Builder
    "build_final_rows",
    "find_stats_for",
]
