"""MFDS 허가 품목 파서

공공데이터포털 API 응답 항목 / 로컬 엑셀 행 → Candidate
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, timedelta
from typing import Any, Optional

from genscan.models import Candidate

# 엑셀 날짜 일련번호 기준일 (1900 윤년 버그 보정 포함)
_EXCEL_EPOCH = datetime(1899, 12, 30)

# 신약 구분 컬럼 (정확한 이름 우선, 없으면 '신약' 포함 컬럼 탐색)
NEW_DRUG_COLUMNS = ["신약구분", "신약 구분", "NEW_DRUG", "newDrug"]

CANCELLED_STATUSES = {"취소", "취하"}


def _text(value: Any) -> str:
    """셀/필드 값을 문자열로 (None, NaN → "")"""
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).strip()


def parse_permit_date(raw: Any) -> str:
    """
    허가일 → YYYYMMDD

    지원 형식:
        20150126, "2015-01-26", "2015.01.26", "7/13/98", 엑셀 일련번호(35989),
        datetime/date/pandas.Timestamp

    Returns:
        YYYYMMDD 문자열 (해석 불가/빈 값이면 "")
    """
    if raw is None or raw == "":
        return ""

    # NaN, NaT
    if raw != raw:
        return ""

    if isinstance(raw, (datetime, date)):
        return raw.strftime("%Y%m%d")

    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        # 8자리 정수는 YYYYMMDD 그대로
        if 19000101 <= raw <= 99991231:
            return str(int(raw))
        return (_EXCEL_EPOCH + timedelta(days=int(raw))).strftime("%Y%m%d")

    s = str(raw).strip()
    if not s:
        return ""

    if re.fullmatch(r"\d{8}", s):
        return s

    slash = re.fullmatch(r"(\d{1,2})/(\d{1,2})/(\d{2,4})", s)
    if slash:
        month, day, year = (int(x) for x in slash.groups())
        if year < 100:
            year += 1900 if year > 50 else 2000
        return f"{year:04d}{month:02d}{day:02d}"

    iso = re.match(r"(\d{4})[-.](\d{1,2})[-.](\d{1,2})", s)
    if iso:
        year, month, day = (int(x) for x in iso.groups())
        return f"{year:04d}{month:02d}{day:02d}"

    return re.sub(r"[^0-9]", "", s)[:8]


def _flag(value: Any) -> bool:
    return _text(value).upper() == "Y"


def find_new_drug_flag(row: dict[str, Any]) -> bool:
    """신약 구분 컬럼 탐색 (컬럼명/위치가 파일마다 다름)"""
    for key in NEW_DRUG_COLUMNS:
        if key in row:
            return _flag(row[key])
    for key in row:
        if "신약" in str(key):
            return _flag(row[key])
    return False


class MFDSCandidateParser:
    """MFDS 허가 품목 파서"""

    def parse_api_item(self, raw: dict[str, Any]) -> Optional[Candidate]:
        """
        공공데이터포털 API 항목 → Candidate

        Args:
            raw: getDrugPrdtPrmsnInq07 응답의 단일 항목

        Returns:
            Candidate (제품명이 없으면 None)
        """
        item_name = _text(raw.get("ITEM_NAME"))
        if not item_name:
            return None

        # 필드명이 API 버전마다 다름
        permit_date = raw.get("ITEM_PERMIT_DATE") or raw.get("PRMSN_DT")
        ingredient = _text(raw.get("ITEM_INGR_NAME") or raw.get("MAIN_ITEM_INGR"))
        ingredient_eng = _text(raw.get("ITEM_INGR_ENG_NAME") or raw.get("MAIN_INGR_ENG"))
        permit_kind = _text(raw.get("PERMIT_KIND_CODE") or raw.get("PERMIT_KIND_NAME"))

        return Candidate(
            item_name=item_name,
            item_name_eng=_text(raw.get("ITEM_ENG_NAME")),
            ingredient=self._first_ingredient(ingredient),
            ingredient_eng=ingredient_eng,
            permit_date=parse_permit_date(permit_date),
            permit_no=_text(raw.get("PRDUCT_PRMISN_NO")),
            item_seq=_text(raw.get("ITEM_SEQ")),
            company_name=_text(raw.get("ENTP_NAME")),
            is_new_drug="신약" in permit_kind or _flag(raw.get("NEW_DRUG")),
        )

    def parse_excel_row(self, row: dict[str, Any]) -> Optional[Candidate]:
        """
        로컬 엑셀(의약품안전나라 다운로드) 행 → Candidate

        취소/취하 품목과 제품명이 없는 행은 None
        """
        item_name = _text(row.get("제품명"))
        if not item_name:
            return None

        if _text(row.get("취소/취하")) in CANCELLED_STATUSES:
            return None

        return Candidate(
            item_name=item_name,
            item_name_eng=_text(row.get("제품영문명")),
            ingredient=_text(row.get("주성분")),
            ingredient_eng=_text(row.get("주성분영문")),
            permit_date=parse_permit_date(row.get("허가일")),
            permit_no=_text(row.get("허가번호")),
            item_seq=_text(row.get("품목기준코드")),
            company_name=_text(row.get("업체명")),
            is_new_drug=find_new_drug_flag(row),
        )

    def parse_api_items(self, raw_list: list[dict[str, Any]]) -> list[Candidate]:
        """여러 API 항목 파싱"""
        parsed = (self.parse_api_item(raw) for raw in raw_list)
        return [c for c in parsed if c is not None]

    def parse_excel_rows(self, rows: list[dict[str, Any]]) -> list[Candidate]:
        """여러 엑셀 행 파싱"""
        parsed = (self.parse_excel_row(row) for row in rows)
        return [c for c in parsed if c is not None]

    @staticmethod
    def _first_ingredient(material_name: str) -> str:
        """
        API 주성분 필드 정리

        "아세트아미노펜|500|밀리그램|KP|정|성분" 처럼 파이프로 구분된 경우
        첫 칸(성분명)만 사용
        """
        if "|" in material_name:
            return material_name.split("|")[0].strip()
        return material_name
