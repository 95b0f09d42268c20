"""로컬 식약처 허가 데이터 (엑셀)

의약품안전나라에서 내려받은 허가 품목 엑셀을 한 번만 읽어 메모리에 두고
후보 검색(Matcher 입력)과 집계용 전체 풀을 함께 제공한다.

사용법:
    dataset = MFDSLocalDataset("data/mfds-data.xlsx")
    dataset.load()
    candidates = dataset.search("글리벡정")
    pool = dataset.candidates
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import pandas as pd

from genscan.map.matcher import is_korean
from genscan.models import Candidate
from genscan.parse.mfds_parser import MFDSCandidateParser

logger = logging.getLogger(__name__)

# 식별 코드 컬럼은 문자열로 읽어야 앞자리 0/지수표기 문제가 없음
_STR_COLUMNS = {"품목기준코드": str, "허가번호": str}

# 검색 실패 시 떼어볼 한글 제형 접미사 (긴 것 우선)
KOR_DOSAGE_FORMS = [
    "필름코팅정", "구강붕해정", "츄어블정", "서방정", "장용정", "분산정", "정",
    "주사액", "주사", "주", "캡슐", "시럽", "현탁액", "액", "산",
    "연고", "크림", "패치", "점안액", "점비액",
]


def strip_dosage_form(name: str) -> str:
    """
    한글 제형 접미사 하나 제거

    예: "글리벡정" → "글리벡" ("글리벡필름코팅정" 검색용)
    """
    upper = name.upper().strip()
    for form in sorted(KOR_DOSAGE_FORMS, key=len, reverse=True):
        if upper.endswith(form) and len(upper) > len(form):
            return upper[: -len(form)]
    return upper


class MFDSLocalDataset:
    """로컬 허가 데이터 핸들 (호출자 소유, 최초 1회 로드)"""

    def __init__(
        self,
        path: Optional[str | Path] = None,
        candidates: Optional[list[Candidate]] = None,
    ):
        self.path = Path(path) if path else None
        self._candidates: Optional[list[Candidate]] = candidates
        self._parser = MFDSCandidateParser()

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> MFDSLocalDataset:
        """이미 읽은 DataFrame으로 생성 (테스트/노트북용)"""
        dataset = cls()
        dataset._candidates = dataset._parse_frame(df)
        return dataset

    @property
    def is_loaded(self) -> bool:
        return self._candidates is not None

    def load(self) -> int:
        """
        엑셀 로드 (이미 로드된 경우 재사용)

        Returns:
            로드된 품목 수
        """
        if self._candidates is not None:
            return len(self._candidates)

        if self.path is None:
            raise ValueError("MFDS data path is not set")
        if not self.path.exists():
            raise FileNotFoundError(f"MFDS data file not found: {self.path}")

        if self.path.suffix.lower() == ".csv":
            df = pd.read_csv(self.path, dtype=_STR_COLUMNS, encoding="utf-8-sig")
        else:
            df = pd.read_excel(self.path, dtype=_STR_COLUMNS, engine="openpyxl")

        self._candidates = self._parse_frame(df)
        logger.info(f"[MFDS Local] {len(self._candidates):,}건 로드 ({self.path.name})")
        return len(self._candidates)

    @property
    def candidates(self) -> list[Candidate]:
        """집계용 전체 풀"""
        if self._candidates is None:
            self.load()
        return self._candidates

    def search(self, query: str) -> list[Candidate]:
        """
        제품명 검색 (후보 공급자)

        - 한글: 제품명 포함
        - 영문: 영문 제품명 또는 제품명 포함
        - 한글 검색 결과가 없으면 제형 접미사를 떼고 재검색

        Args:
            query: 검색어 (정리된 키 또는 번역된 한글명)

        Returns:
            후보 품목 목록
        """
        q = query.upper().strip()
        if not q:
            return []

        data = self.candidates
        korean = is_korean(q)

        if korean:
            results = [c for c in data if q in c.item_name.upper()]
        else:
            results = [
                c for c in data
                if q in c.item_name_eng.upper() or q in c.item_name.upper()
            ]

        if not results and korean:
            base = strip_dosage_form(q)
            if base != q and len(base) >= 2:
                results = [c for c in data if base in c.item_name.upper()]

        return results

    def search_by_ingredient(self, query: str) -> list[Candidate]:
        """주성분(한글/영문) 포함 검색"""
        q = query.upper().strip()
        if not q:
            return []
        return [
            c for c in self.candidates
            if q in c.ingredient.upper() or q in c.ingredient_eng.upper()
        ]

    def __call__(self, query: str) -> list[Candidate]:
        return self.search(query)

    def __len__(self) -> int:
        return len(self.candidates)

    def _parse_frame(self, df: pd.DataFrame) -> list[Candidate]:
        rows = df.to_dict(orient="records")
        candidates = self._parser.parse_excel_rows(rows)
        skipped = len(rows) - len(candidates)
        if skipped:
            logger.debug(f"[MFDS Local] 취소/취하·빈 제품명 {skipped}건 제외")
        return candidates
