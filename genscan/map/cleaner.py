"""입력 제품명 정리 (검색 키 생성)"""

from __future__ import annotations

import re

# 입력 엑셀에 섞여 들어오는 내부 코드 (긴 토큰 우선)
ARTIFACT_TOKENS = [
    "P5V>>",
    "EUP>>",
    "AB8>>",
    "CC4>>",
    "MPM>>",
    "G-O",
    ">>",
]

_SORTED_TOKENS = sorted(ARTIFACT_TOKENS, key=len, reverse=True)


def clean_product_name(raw: str) -> str:
    """
    자유 텍스트 제품명 → 검색 키

    대문자 변환(한글은 영향 없음), '.' → 공백, 내부 코드 토큰 제거,
    공백 정리 순으로 처리한다.

    Args:
        raw: 입력 제품명

    Returns:
        정리된 검색 키 (빈 입력이면 "")
    """
    if not raw:
        return ""

    cleaned = raw.strip().upper()
    cleaned = cleaned.replace(".", " ")

    # ">>" 가 긴 토큰의 접미사이므로 더 이상 제거할 토큰이 없을 때까지 반복
    changed = True
    while changed:
        changed = False
        for token in _SORTED_TOKENS:
            if token in cleaned:
                cleaned = cleaned.replace(token, "", 1)
                changed = True
                break

    cleaned = re.sub(r"\s+", " ", cleaned)
    return cleaned.strip()


clean = clean_product_name
