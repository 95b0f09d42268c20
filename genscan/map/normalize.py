"""함량/제형 및 염·수화물 정규화

**정규화 ≠ 퍼지매칭**: 함량과 염 형태만 걷어내고, 이후 비교는 완전 일치로 수행

- strip_dosage: 괄호, 함량(40mg/0.8mL, 25밀리그램 등) 제거 → 같은 제품의 함량 차이 흡수
- strip_salts: 염/수화물/에스테르 접미사 제거 → 같은 성분의 염 형태 차이 흡수
"""

from __future__ import annotations

import re

# 함량 단위 (한/영). 정규식에서는 긴 단위부터 시도
DOSAGE_UNITS = [
    "MG", "ML", "G", "MCG", "UG", "IU", "UNIT", "UNITS", "%",
    "밀리그램", "그램", "밀리리터", "리터", "마이크로그램", "단위", "국제단위",
]

_NUM = r"\d+(?:[.,]\d+)*"
_UNIT = (
    "(?:"
    + "|".join(re.escape(u) for u in sorted(DOSAGE_UNITS, key=len, reverse=True))
    + ")(?![A-Z])"
)

_PAREN_RE = re.compile(r"\([^()]*?\)")
_COMPOUND_RE = re.compile(rf"{_NUM}\s*{_UNIT}\s*/\s*(?:{_NUM})?\s*(?:{_UNIT})?")
_SIMPLE_RE = re.compile(rf"{_NUM}\s*{_UNIT}")
_RATIO_LEFT_RE = re.compile(rf"{_NUM}\s*(?:{_UNIT})?\s*/\s*(?:{_NUM}\s*(?:{_UNIT})?)?")
_RATIO_RIGHT_RE = re.compile(rf"/\s*{_NUM}\s*(?:{_UNIT})?")
_LEADING_NUM_RE = re.compile(rf"^(?:{_NUM}\s+)+")
_TRAILING_NUM_RE = re.compile(rf"(?:\s+{_NUM})+$")
_EMBEDDED_NUM_RE = re.compile(rf"\b{_NUM}\b")

# 영문 염/수화물/에스테르 (단어 단위로 어디서든 제거)
ENG_SALT_SUFFIXES = [
    # 수화물
    "HEPTAHYDRATE", "HEXAHYDRATE", "PENTAHYDRATE", "TETRAHYDRATE",
    "TRIHYDRATE", "DIHYDRATE", "MONOHYDRATE", "SESQUIHYDRATE",
    "HEMIHYDRATE", "HYDRATE", "ANHYDROUS",
    # 산염
    "DIHYDROCHLORIDE", "HYDROCHLORIDE", "HCL", "HYDROBROMIDE",
    "DIMESYLATE", "MESYLATE", "MESILATE", "BESYLATE", "BESILATE",
    "TOSYLATE", "TOSILATE", "MALEATE", "HEMIFUMARATE", "FUMARATE",
    "SUCCINATE", "BITARTRATE", "TARTRATE", "CITRATE", "SULFATE",
    "SULPHATE", "PHOSPHATE", "ACETATE", "NITRATE", "LACTATE",
    # 금속염/염기
    "DISODIUM", "SODIUM", "DIPOTASSIUM", "POTASSIUM", "CALCIUM",
    "MAGNESIUM", "OLAMINE", "MEGLUMINE", "TROMETHAMINE",
    # 프로드럭 에스테르
    "MEDOXOMIL", "AXETIL", "PIVOXIL",
]

# 한글 염/수화물 (어미처럼 붙으므로 끝에서만 반복 제거)
KOR_SALT_SUFFIXES = [
    # 수화물
    "세스퀴수화물", "칠수화물", "육수화물", "오수화물", "사수화물",
    "삼수화물", "이수화물", "일수화물", "반수화물", "수화물", "무수물",
    # 산염
    "브롬화수소산염", "타르타르산염", "푸마르산염", "이염산염", "염산염",
    "메실산염", "베실산염", "토실산염", "말레산염", "숙신산염",
    "주석산염", "시트르산염", "아세트산염", "황산염", "인산염", "질산염",
    # 금속염/염기
    "이나트륨염", "나트륨염", "칼륨염", "칼슘염", "마그네슘염",
    "이나트륨", "나트륨", "이칼륨", "칼륨", "칼슘", "마그네슘",
    "올라민", "메글루민",
]

_ENG_SORTED = sorted(ENG_SALT_SUFFIXES, key=len, reverse=True)
_KOR_SORTED = sorted(KOR_SALT_SUFFIXES, key=len, reverse=True)


def _collapse(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def strip_dosage(text: str) -> str:
    """
    함량/괄호 주석 제거

    예:
        "에타너셉트(유전자재조합) 25mg" → "에타너셉트"
        "아달리무맙 40mg/0.8mL" → "아달리무맙"
        "알림타주100밀리그램" → "알림타주"

    Args:
        text: 성분명 또는 제품명

    Returns:
        대문자, 함량 제거된 문자열
    """
    if not text:
        return ""

    s = text.upper()

    # 1. 괄호 (제조방법 등 주석). 중첩 괄호는 안쪽부터
    prev = None
    while prev != s:
        prev = s
        s = _PAREN_RE.sub(" ", s)

    # 2~6은 제거 후 새로 붙는 함량 조각(예: "100 100 MG MG")이 없을 때까지 반복
    prev = None
    while prev != s:
        prev = s

        # 2. 복합 함량 (40MG/0.8ML). 단순 함량보다 먼저
        s = _COMPOUND_RE.sub(" ", s)

        # 3. 단순 함량
        s = _SIMPLE_RE.sub(" ", s)

        # 4. 남은 비율 조각
        s = _RATIO_LEFT_RE.sub(" ", s)
        s = _RATIO_RIGHT_RE.sub(" ", s)

        # 5. 남은 슬래시
        s = s.replace("/", " ")

        # 6. 앞/뒤 단독 숫자
        s = _collapse(s)
        s = _LEADING_NUM_RE.sub("", s)
        s = _TRAILING_NUM_RE.sub("", s)
        s = _collapse(s)

    return s


def strip_salts(text: str, suffixes: list[str], trailing: bool = False) -> str:
    """
    염/수화물 접미사 제거

    Args:
        text: strip_dosage 결과 (대문자)
        suffixes: 접미사 목록 (ENG_SALT_SUFFIXES / KOR_SALT_SUFFIXES)
        trailing: True면 문자열 끝에서만 반복 제거 (한글), False면 단어 단위 전체 제거 (영문)

    Returns:
        기본 성분명. 접미사만으로 이루어진 경우 원본 유지
    """
    if not text:
        return ""

    ordered = sorted(suffixes, key=len, reverse=True)
    s = _collapse(text.upper())

    if trailing:
        stripped = True
        while stripped:
            stripped = False
            for suffix in ordered:
                if s.endswith(suffix) and len(s) > len(suffix):
                    s = s[: -len(suffix)].strip()
                    stripped = True
                    break
        return s

    base = _EMBEDDED_NUM_RE.sub(" ", s)
    for suffix in ordered:
        base = re.sub(rf"\b{re.escape(suffix)}\b", " ", base)
    base = re.sub(r"\s+([,;])", r"\1", _collapse(base))
    base = base.strip(" ,;")

    return base or s


def strip_salts_eng(text: str) -> str:
    return strip_salts(text, _ENG_SORTED)


def strip_salts_kor(text: str) -> str:
    return strip_salts(text, _KOR_SORTED, trailing=True)


def normalize_ingredient_eng(name: str) -> str:
    """영문 성분명 → 그룹 키 ("Pemetrexed Disodium Heptahydrate" → "PEMETREXED")"""
    return strip_salts_eng(strip_dosage(name))


def normalize_ingredient_kor(name: str) -> str:
    """한글 성분명 → 그룹 키 ("페메트렉시드이나트륨염칠수화물" → "페메트렉시드")"""
    return strip_salts_kor(strip_dosage(name))
