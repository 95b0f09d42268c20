"""매칭 실행 스크립트 테스트 (로컬 데이터, 번역 없음)"""

import pandas as pd
import pytest

from genscan.scripts.run_match import run


@pytest.fixture
def mfds_csv(tmp_path):
    path = tmp_path / "mfds-data.csv"
    pd.DataFrame([
        {"품목기준코드": "200600001", "제품명": "알림타주100밀리그램",
         "주성분": "페메트렉시드이나트륨염칠수화물",
         "주성분영문": "Pemetrexed Disodium Heptahydrate", "허가일": "20060101"},
        {"품목기준코드": "201500003", "제품명": "메인타주100밀리그램",
         "주성분": "페메트렉시드이나트륨", "주성분영문": "Pemetrexed Disodium",
         "허가일": "20150101"},
        {"품목기준코드": "201600004", "제품명": "알림시드주100밀리그램",
         "주성분": "페메트렉시드이나트륨염칠수화물", "주성분영문": None,
         "허가일": "20160101"},
    ]).to_csv(path, index=False, encoding="utf-8-sig")
    return path


class TestRunMatch:

    @pytest.mark.asyncio
    async def test_local_run(self, mfds_csv, tmp_path):
        input_path = tmp_path / "input.csv"
        pd.DataFrame({
            "순번": ["1", "2", "3"],
            "제품명": ["P5V>>알림타주100밀리그램", "모르는약", "알림시드주100밀리그램"],
        }).to_csv(input_path, index=False, encoding="utf-8-sig")
        output_path = tmp_path / "out" / "result.xlsx"

        result = await run(input_path, output_path, mfds_csv)

        assert output_path.exists()
        assert result.matched_count == 2
        assert [r.original_flag for r in result.final_rows] == ["O", "X", "X"]
        assert result.final_rows[2].generic_count == 2
        assert result.unmatched_rows[0].sequence_tag == "2"
