"""MFDS (식약처) 의약품 제품 허가정보 API 후보 공급자

공공데이터포털 API: 식품의약품안전처_의약품 제품 허가정보
- 엔드포인트: apis.data.go.kr/1471000/DrugPrdtPrmsnInfoService07
- 한글 검색어: item_name
- 영문 검색어: item_eng_name → item_name → 첫 단어로 item_eng_name 순으로 재시도
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Optional
from urllib.parse import urlencode

import httpx

from genscan.config import settings
from genscan.map.matcher import is_korean
from genscan.models import Candidate
from genscan.parse.mfds_parser import MFDSCandidateParser

logger = logging.getLogger(__name__)


class MFDSAPIError(Exception):
    """공공데이터포털 에러 응답 (resultCode != 00)"""

    def __init__(self, result_code: str, message: str):
        self.result_code = result_code
        super().__init__(f"API Error ({result_code}): {message}")


def normalize_items(data: dict[str, Any]) -> tuple[list[dict[str, Any]], int]:
    """
    응답 body에서 items/totalCount 추출

    body.items 가 리스트인 경우와 {"item": [...] | {...}} 인 경우 모두 처리
    """
    body = (data or {}).get("body")
    if not body:
        return [], 0

    total_count = int(body.get("totalCount") or 0)
    items_field = body.get("items")

    items: list[dict[str, Any]] = []
    if isinstance(items_field, list):
        items = items_field
    elif isinstance(items_field, dict) and items_field.get("item"):
        item = items_field["item"]
        items = item if isinstance(item, list) else [item]

    return items, total_count


class MFDSClient:
    """MFDS 공공데이터 API 클라이언트"""

    ENDPOINT = "/getDrugPrdtPrmsnInq07"  # 허가정보 조회

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        retry_delay: float = 1.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key or settings.DATA_GO_KR_API_KEY
        self.base_url = base_url or settings.MFDS_BASE_URL
        self.timeout = timeout or settings.MFDS_TIMEOUT
        self.max_retries = max_retries or settings.MFDS_MAX_RETRIES
        self.retry_delay = retry_delay
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("MFDSClient must be used as async context manager")
        return self._client

    async def search_permits(
        self,
        item_name: Optional[str] = None,
        item_eng_name: Optional[str] = None,
        page_no: int = 1,
        num_of_rows: Optional[int] = None,
    ) -> dict[str, Any]:
        """
        의약품 허가정보 검색

        Args:
            item_name: 제품명 (한글)
            item_eng_name: 제품 영문명
            page_no: 페이지 번호
            num_of_rows: 페이지당 건수 (최대 100)

        Returns:
            API 응답 dict
        """
        params: dict[str, Any] = {
            "serviceKey": self.api_key,
            "pageNo": page_no,
            "numOfRows": num_of_rows or settings.MFDS_NUM_OF_ROWS,
            "type": "json",
        }
        if item_name:
            params["item_name"] = item_name
        if item_eng_name:
            params["item_eng_name"] = item_eng_name

        return await self._request(f"{self.base_url}{self.ENDPOINT}", params)

    async def search(self, term: str) -> list[dict[str, Any]]:
        """
        검색어 언어에 따라 검색 전략 선택

        Returns:
            원본 API 항목 목록 (첫 페이지)
        """
        if is_korean(term):
            items, total = normalize_items(await self.search_permits(item_name=term))
            logger.info(f"[MFDS] '{term}' (KR) → {total}건")
            return items

        items, total = normalize_items(await self.search_permits(item_eng_name=term))

        if total == 0:
            # 영문을 item_name으로 넣어도 부분 일치되는 경우가 있음
            items, total = normalize_items(await self.search_permits(item_name=term))

        if total == 0:
            first_word = re.split(r"[\s.]+", term)[0]
            if first_word and first_word != term:
                items, total = normalize_items(
                    await self.search_permits(item_eng_name=first_word)
                )

        logger.info(f"[MFDS] '{term}' (EN) → {total}건")
        return items

    async def _request(self, url: str, params: dict) -> dict[str, Any]:
        """
        API 요청 (재시도 로직 포함)

        Note: 공공데이터포털 API 키는 이미 URL 인코딩되어 있으므로
              직접 URL에 추가해야 함 (httpx params 사용시 이중 인코딩 발생)
        """
        last_error: Optional[Exception] = None

        params = params.copy()
        service_key = params.pop("serviceKey", "") or ""
        full_url = f"{url}?serviceKey={service_key}&{urlencode(params)}"

        for attempt in range(self.max_retries):
            try:
                response = await self.client.get(full_url)

                # Rate limit 처리
                if response.status_code == 429:
                    wait_time = self.retry_delay * (2 ** attempt)
                    logger.warning(f"Rate limited, waiting {wait_time}s...")
                    last_error = httpx.HTTPStatusError(
                        "429 Too Many Requests", request=response.request, response=response
                    )
                    await asyncio.sleep(wait_time)
                    continue

                response.raise_for_status()
                data = response.json()

                if "header" in data:
                    result_code = data["header"].get("resultCode", "00")
                    if result_code != "00":
                        raise MFDSAPIError(
                            result_code, data["header"].get("resultMsg", "Unknown error")
                        )

                return data

            except httpx.HTTPStatusError as e:
                last_error = e
                logger.warning(f"HTTP error (attempt {attempt + 1}): {e}")
                await asyncio.sleep(self.retry_delay)

            except httpx.RequestError as e:
                last_error = e
                logger.warning(f"Request error (attempt {attempt + 1}): {e}")
                await asyncio.sleep(self.retry_delay)

        raise last_error or MFDSAPIError("99", "Unknown error")


class MFDSRemoteSupplier:
    """
    API 기반 후보 공급자

    검색마다 반환된 품목을 누적해 집계용 풀로 제공한다.
    (원격 모드에서는 레지스트리 전체를 받을 수 없으므로 검색 결과 합집합이 풀)

    사용법:
        async with MFDSRemoteSupplier() as supplier:
            outcomes = await process_products(rows, supplier)
            pool = supplier.pool
    """

    def __init__(self, client: Optional[MFDSClient] = None):
        self._mfds = client or MFDSClient()
        self._parser = MFDSCandidateParser()
        self._pool: list[Candidate] = []

    async def __aenter__(self):
        if not self._mfds.api_key:
            raise ValueError("DATA_GO_KR_API_KEY is not configured")
        await self._mfds.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self._mfds.__aexit__(exc_type, exc_val, exc_tb)

    async def __call__(self, term: str) -> list[Candidate]:
        candidates = self._parser.parse_api_items(await self._mfds.search(term))
        self._pool.extend(candidates)
        return candidates

    @property
    def pool(self) -> list[Candidate]:
        return list(self._pool)
