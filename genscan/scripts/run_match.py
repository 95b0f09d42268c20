"""제품명 매칭 · 제네릭 집계 실행 스크립트

사용법:
    python -m genscan.scripts.run_match --input products.xlsx
    python -m genscan.scripts.run_match --input products.xlsx --mfds-data data/mfds-data.xlsx --output out/result.xlsx
    python -m genscan.scripts.run_match --input products.xlsx --remote --translate
"""

import argparse
import asyncio
import logging
from datetime import datetime
from pathlib import Path

from genscan.ai import DrugNameTranslator
from genscan.config import settings
from genscan.ingest import MFDSLocalDataset, MFDSRemoteSupplier, read_input_rows
from genscan.models import BuildResult, InputRow, UnmatchedReason
from genscan.pipeline import get_unique_keys, run_batch
from genscan.report import export_result

# 로깅 설정
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def _log_progress(done: int, total: int) -> None:
    if done == total or done % 50 == 0:
        logger.info(f"검색 진행: {done}/{total}")


async def translate_english_keys(rows: list[InputRow]) -> dict[str, str]:
    """영문 검색 키 → 한글 검색어"""
    keys = get_unique_keys(rows)
    if not keys.eng_keys:
        return {}
    logger.info(f"영문 검색 키 {len(keys.eng_keys)}개 번역")
    return await DrugNameTranslator().translate(keys.eng_keys)


async def run(
    input_path: Path,
    output_path: Path,
    mfds_data: Path,
    remote: bool = False,
    translate: bool = False,
) -> BuildResult:
    """
    매칭 실행

    Args:
        input_path: 입력 엑셀/CSV
        output_path: 결과 파일
        mfds_data: 로컬 허가 데이터 (remote=False)
        remote: 공공데이터포털 API 사용
        translate: 영문 키 번역 후 검색

    Returns:
        BuildResult
    """
    rows = read_input_rows(input_path)
    translations = await translate_english_keys(rows) if translate else {}

    if remote:
        async with MFDSRemoteSupplier() as supplier:
            result = await run_batch(
                rows, supplier,
                confirmed_translations=translations,
                on_progress=_log_progress,
            )
    else:
        dataset = MFDSLocalDataset(mfds_data)
        dataset.load()
        result = await run_batch(
            rows, dataset,
            confirmed_translations=translations,
            on_progress=_log_progress,
        )

    export_result(result, output_path)

    logger.info("=" * 50)
    logger.info(f"전체 {len(result.final_rows)}행 / 매칭 {result.matched_count}행")
    reasons: dict[UnmatchedReason, int] = {}
    for row in result.unmatched_rows:
        reasons[row.reason] = reasons.get(row.reason, 0) + 1
    for reason, count in reasons.items():
        logger.info(f"  미매칭 {reason.value}: {count}행")
    logger.info("=" * 50)

    return result


def main():
    parser = argparse.ArgumentParser(description="의약품 제품명 매칭 및 제네릭 집계")
    parser.add_argument("--input", "-i", type=Path, required=True, help="입력 엑셀/CSV")
    parser.add_argument(
        "--output", "-o", type=Path, default=None,
        help="결과 파일 (기본: data/output/result_YYYYMMDD_HHMMSS.xlsx)",
    )
    parser.add_argument(
        "--mfds-data", type=Path, default=settings.MFDS_DATA_PATH,
        help="로컬 식약처 허가 데이터 엑셀",
    )
    parser.add_argument("--remote", action="store_true", help="공공데이터포털 API로 검색")
    parser.add_argument(
        "--translate", action="store_true", default=settings.USE_TRANSLATION,
        help="영문 제품명을 한글로 번역 후 검색",
    )
    args = parser.parse_args()

    output = args.output or (
        settings.DATA_DIR / "output" / f"result_{datetime.now():%Y%m%d_%H%M%S}.xlsx"
    )

    asyncio.run(
        run(
            input_path=args.input,
            output_path=output,
            mfds_data=args.mfds_data,
            remote=args.remote,
            translate=args.translate,
        )
    )


if __name__ == "__main__":
    main()
