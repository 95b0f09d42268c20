"""식약처 허가 품목 / 입력 행 모델"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# 허가일 미상. 정렬 시 가장 늦은 날짜로 취급
UNKNOWN_PERMIT_DATE = "99999999"


class MatchQuality(str, Enum):
    """매칭 품질"""

    EXACT = "EXACT"  # 제품명 완전/부분 일치
    FUZZY = "FUZZY"  # 후보 전체 중 최초 허가일 선택


class UnmatchedReason(str, Enum):
    """미매칭 사유"""

    NO_RESULT = "NO_RESULT"  # 검색 결과 없음
    NO_RESULT_ENGLISH = "NO_RESULT_ENGLISH"  # 영문 검색어 결과 없음 (번역 후 재검색 대상)
    NO_INGREDIENT = "NO_INGREDIENT"  # 매칭됐으나 주성분 정보 없음
    AMBIGUOUS = "AMBIGUOUS"  # 후보는 있으나 선택 불가
    SOURCE_ERROR = "SOURCE_ERROR"  # 데이터 소스(API 등) 오류


class Candidate(BaseModel):
    """식약처 허가 품목 (레지스트리 한 행)"""

    item_name: str = Field(..., description="제품명")
    item_name_eng: str = Field("", description="제품영문명")
    ingredient: str = Field("", description="주성분 (한글, 함량/염 포함 가능)")
    ingredient_eng: str = Field("", description="주성분 영문")
    permit_date: str = Field("", description="허가일 (YYYYMMDD)")
    permit_no: str = Field("", description="허가번호")
    item_seq: str = Field("", description="품목기준코드")
    company_name: str = Field("", description="업체명")
    is_new_drug: bool = Field(False, description="신약 구분")

    @property
    def sort_date(self) -> str:
        """허가일 정렬 키 (미상이면 맨 뒤)"""
        return self.permit_date or UNKNOWN_PERMIT_DATE

    @property
    def has_ingredient(self) -> bool:
        return bool(self.ingredient.strip() or self.ingredient_eng.strip())


class InputRow(BaseModel):
    """입력 엑셀 한 행"""

    product: str = Field(..., description="입력 제품명 (자유 텍스트)")
    sequence_tag: Optional[str] = Field(None, description="순번 (그대로 출력에 전달)")
