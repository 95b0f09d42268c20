"""공통 pytest 설정 및 fixture

- 합성 허가 품목 풀 (네트워크/파일 불필요)
"""

import pytest

from genscan.models import Candidate


def make_candidate(item_name: str, **kwargs) -> Candidate:
    return Candidate(item_name=item_name, **kwargs)


# ── 공통 fixture ──

@pytest.fixture
def pemetrexed_pool():
    """페메트렉시드 품목 (영문 주성분 누락 2건 포함)"""
    return [
        make_candidate("알림타주100밀리그램", ingredient="페메트렉시드이나트륨염칠수화물",
                       ingredient_eng="Pemetrexed Disodium Heptahydrate",
                       permit_date="20060101", permit_no="P1", item_seq="S1"),
        make_candidate("알림타주500밀리그램", ingredient="페메트렉시드이나트륨염칠수화물",
                       ingredient_eng="Pemetrexed Disodium Heptahydrate",
                       permit_date="20060101", permit_no="P2", item_seq="S2"),
        make_candidate("메인타주100밀리그램", ingredient="페메트렉시드이나트륨",
                       ingredient_eng="Pemetrexed Disodium",
                       permit_date="20150101", permit_no="P3", item_seq="S3"),
        make_candidate("알림시드주100밀리그램", ingredient="페메트렉시드이나트륨염칠수화물",
                       ingredient_eng="", permit_date="20160101", permit_no="P4", item_seq="S4"),
        make_candidate("페메드주500밀리그램", ingredient="페메트렉시드이나트륨",
                       ingredient_eng="", permit_date="20170101", permit_no="P5", item_seq="S5"),
        make_candidate("페메렉스주100밀리그램", ingredient="페메트렉시드이나트륨염칠수화물",
                       ingredient_eng="Pemetrexed Disodium Heptahydrate",
                       permit_date="20180101", permit_no="P6", item_seq="S6"),
    ]


@pytest.fixture
def imatinib_pool():
    """이마티닙: 신약 표시 오리지널(2개 함량) + 후발 제네릭 3개"""
    return [
        make_candidate("글리벡필름코팅정100밀리그램", item_name_eng="Glivec Film Coated Tab. 100mg",
                       ingredient="이마티닙메실산염", ingredient_eng="Imatinib Mesylate",
                       permit_date="20030612", item_seq="200300001", is_new_drug=True),
        make_candidate("글리벡필름코팅정400밀리그램", item_name_eng="Glivec Film Coated Tab. 400mg",
                       ingredient="이마티닙메실산염", ingredient_eng="Imatinib Mesylate",
                       permit_date="20050301", item_seq="200500002", is_new_drug=True),
        make_candidate("글리닙정100밀리그램", ingredient="이마티닙메실산염",
                       ingredient_eng="Imatinib Mesylate", permit_date="20130601",
                       item_seq="201300003"),
        make_candidate("이매티브정100밀리그램", ingredient="이마티닙메실산염",
                       ingredient_eng="Imatinib Mesylate", permit_date="20130701",
                       item_seq="201300004"),
        make_candidate("플루티닙정400밀리그램", ingredient="이마티닙메실산염",
                       ingredient_eng="Imatinib Mesylate", permit_date="20140101",
                       item_seq="201400005"),
    ]


@pytest.fixture
def mixed_pool(pemetrexed_pool, imatinib_pool):
    """두 성분을 섞은 풀"""
    return pemetrexed_pool + imatinib_pool
