"""성분 그룹 집계 테스트"""

from genscan.map import compute_aggregates, dedup_candidates, identity_key
from genscan.models import Candidate, MatchedResult, MatchQuality


class TestDedup:
    """중복 제거"""

    def test_identity_key_priority(self):
        assert identity_key(Candidate(item_name="A", item_seq="1", permit_no="P")) == "seq:1"
        assert identity_key(Candidate(item_name="A", permit_no="P")) == "permit:P"
        assert identity_key(Candidate(item_name="A")).startswith("obj:")

    def test_first_seen_kept(self, pemetrexed_pool):
        copy = pemetrexed_pool[0].model_copy(update={"permit_date": "20990101"})
        unique = dedup_candidates(pemetrexed_pool + [copy])
        assert len(unique) == len(pemetrexed_pool)
        assert unique[0].permit_date == "20060101"

    def test_records_without_identity_all_kept(self):
        pool = [Candidate(item_name="A정"), Candidate(item_name="A정")]
        assert len(dedup_candidates(pool)) == 2


class TestComputeAggregates:
    """compute_aggregates 테스트"""

    def test_pemetrexed_merges_korean_only_records(self, pemetrexed_pool):
        stats = compute_aggregates([], pemetrexed_pool)

        assert list(stats) == ["PEMETREXED"]
        group = stats["PEMETREXED"]
        assert group.generic_count == 4
        assert group.min_permit_date == "20060101"
        assert group.original_names == ["알림타주"]
        assert group.product_names == ["알림타주", "메인타주", "알림시드주", "페메드주", "페메렉스주"]

    def test_new_drug_flag_defines_originals(self, imatinib_pool):
        group = compute_aggregates([], imatinib_pool)["IMATINIB"]
        assert group.original_names == ["글리벡필름코팅정"]
        assert group.generic_count == 3
        assert group.product_count == 4

    def test_new_drug_flag_beats_earliest_date(self):
        pool = [
            Candidate(item_name="제네릭정", ingredient_eng="Tadalafil", permit_date="20000101"),
            Candidate(item_name="시알리스정", ingredient_eng="Tadalafil",
                      permit_date="20030101", is_new_drug=True),
        ]
        group = compute_aggregates([], pool)["TADALAFIL"]
        assert group.original_names == ["시알리스정"]
        assert group.min_permit_date == "20000101"
        assert group.generic_count == 1

    def test_same_day_originals(self):
        pool = [
            Candidate(item_name="가정", ingredient_eng="Alpha", permit_date="20100101"),
            Candidate(item_name="나정", ingredient_eng="Alpha", permit_date="20100101"),
            Candidate(item_name="다정", ingredient_eng="Alpha", permit_date="20120101"),
        ]
        group = compute_aggregates([], pool)["ALPHA"]
        assert sorted(group.original_names) == ["가정", "나정"]
        assert group.generic_count == 1

    def test_single_product(self):
        pool = [Candidate(item_name="단독정10밀리그램", ingredient="단독성분")]
        group = compute_aggregates([], pool)["단독성분"]
        assert group.generic_count == 0
        assert group.product_names == ["단독정"]

    def test_unknown_dates_only(self):
        pool = [
            Candidate(item_name="가정", ingredient_eng="Alpha"),
            Candidate(item_name="나정", ingredient_eng="Alpha"),
        ]
        group = compute_aggregates([], pool)["ALPHA"]
        assert group.min_permit_date == "99999999"
        assert group.generic_count == 0

    def test_duplicate_records_counted_once(self, pemetrexed_pool):
        stats = compute_aggregates([], pemetrexed_pool + pemetrexed_pool[:3])
        assert stats["PEMETREXED"].generic_count == 4

    def test_records_without_ingredient_skipped(self, pemetrexed_pool):
        pool = pemetrexed_pool + [Candidate(item_name="무성분주", item_seq="X1")]
        stats = compute_aggregates([], pool)
        assert list(stats) == ["PEMETREXED"]

    def test_matched_candidate_added_to_pool(self):
        candidate = Candidate(item_name="엔브렐주25밀리그램", ingredient_eng="Etanercept",
                              permit_date="20050101", item_seq="E1")
        matched = MatchedResult("엔브렐", "엔브렐", candidate, MatchQuality.FUZZY)
        stats = compute_aggregates([matched], [])
        assert stats["ETANERCEPT"].product_names == ["엔브렐주"]

    def test_mixed_groups(self, mixed_pool):
        stats = compute_aggregates([], mixed_pool)
        assert set(stats) == {"PEMETREXED", "IMATINIB"}
        for s in stats.values():
            assert 0 <= s.generic_count <= s.product_count - 1
