"""성분 그룹 키 테스트"""

from genscan.map import IngredientGroupResolver, build_cross_reference, group_key
from genscan.models import Candidate


class TestCrossReference:
    """한글 → 영문 교차참조표"""

    def test_pemetrexed(self, pemetrexed_pool):
        assert build_cross_reference(pemetrexed_pool) == {"페메트렉시드": "PEMETREXED"}

    def test_requires_both_names(self):
        pool = [Candidate(item_name="가정", ingredient="가나다")]
        assert build_cross_reference(pool) == {}

    def test_majority_wins(self):
        pool = [
            Candidate(item_name="A", ingredient="가나다", ingredient_eng="Beta"),
            Candidate(item_name="B", ingredient="가나다", ingredient_eng="Alpha"),
            Candidate(item_name="C", ingredient="가나다", ingredient_eng="Alpha"),
        ]
        assert build_cross_reference(pool)["가나다"] == "ALPHA"

    def test_tie_keeps_first_seen(self):
        pool = [
            Candidate(item_name="A", ingredient="가나다", ingredient_eng="Beta"),
            Candidate(item_name="B", ingredient="가나다", ingredient_eng="Alpha"),
        ]
        assert build_cross_reference(pool)["가나다"] == "BETA"


class TestGroupKey:
    """group_key / IngredientGroupResolver"""

    def test_english_preferred(self, pemetrexed_pool):
        assert group_key(pemetrexed_pool[0]) == "PEMETREXED"

    def test_korean_fallback_without_cross_ref(self, pemetrexed_pool):
        assert group_key(pemetrexed_pool[3]) == "페메트렉시드"

    def test_korean_resolved_through_cross_ref(self, pemetrexed_pool):
        resolver = IngredientGroupResolver.from_pool(pemetrexed_pool)
        keys = {resolver.group_key(c) for c in pemetrexed_pool}
        assert keys == {"PEMETREXED"}
        assert len(resolver) == 1

    def test_no_ingredient(self):
        assert group_key(Candidate(item_name="무성분정")) == ""

    def test_korean_only_group_stays_korean(self, pemetrexed_pool):
        resolver = IngredientGroupResolver.from_pool(pemetrexed_pool)
        other = Candidate(item_name="타다정", ingredient="타다라필")
        assert resolver.group_key(other) == "타다라필"
