"""영문 제품명 → 식약처 한글 제품명 번역

영문 검색어로 후보가 없을 때(NO_RESULT_ENGLISH) 한글 브랜드명으로 재검색하기 위한
보조 기능. 번역은 best-effort로, 실패해도 배치는 계속 진행한다.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Optional

from genscan.config import settings
from genscan.map.matcher import is_korean

logger = logging.getLogger(__name__)

TRANSLATE_PROMPT = """You are a pharmaceutical drug name translator. Given English drug brand/product names, return their Korean (한국어) equivalents as used in MFDS (식약처) database.

Rules:
- Return ONLY the Korean brand name (e.g., 엔브렐, 휴미라, 프라닥사)
- Do NOT include dosage form (정, 캡슐, 주, 주사 etc.) or strength
- Do NOT add spaces in the Korean name
- If you don't know the Korean name, return the original English name unchanged
- Return a JSON object {{"translations": [{{"eng": ..., "kor": ...}}]}}

Input names:
{names}"""


def parse_translations(content: str) -> list[dict[str, str]]:
    """LLM 응답에서 [{eng, kor}] 추출 (markdown 코드블록 허용)"""
    text = re.sub(r"```(?:json)?\n?", "", content or "").strip()
    if not text:
        return []

    data = json.loads(text)
    if isinstance(data, dict):
        data = data.get("translations", [])
    if not isinstance(data, list):
        return []
    return [t for t in data if isinstance(t, dict) and t.get("eng") and t.get("kor")]


class DrugNameTranslator:
    """OpenAI 호환 chat completions 기반 번역기"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        batch_size: Optional[int] = None,
    ):
        self.api_key = api_key or settings.OPENAI_API_KEY
        self.model = model or settings.TRANSLATE_MODEL
        self.base_url = base_url or settings.OPENAI_BASE_URL
        self.batch_size = batch_size or settings.TRANSLATE_BATCH_SIZE
        self._client = None

    def _get_client(self):
        """OpenAI 클라이언트 lazy init"""
        if self._client is None:
            from openai import AsyncOpenAI
            self._client = AsyncOpenAI(api_key=self.api_key, base_url=self.base_url)
        return self._client

    async def translate(self, eng_names: list[str]) -> dict[str, str]:
        """
        영문명 일괄 번역

        Args:
            eng_names: 정리된 영문 검색 키

        Returns:
            {영문 대문자: 한글명} (한글이 포함된 번역만 포함)
        """
        result: dict[str, str] = {}
        if not eng_names:
            return result

        if not self.api_key:
            logger.warning("OPENAI_API_KEY 미설정, 번역 건너뜀")
            return result

        for start in range(0, len(eng_names), self.batch_size):
            batch = eng_names[start:start + self.batch_size]
            try:
                result.update(await self._translate_batch(batch))
            except Exception as e:
                logger.warning("번역 실패 (%d건): %s", len(batch), e)

        logger.info("번역 완료: %d/%d건", len(result), len(eng_names))
        return result

    async def _translate_batch(self, batch: list[str]) -> dict[str, str]:
        prompt = TRANSLATE_PROMPT.format(
            names="\n".join(f"{i + 1}. {name}" for i, name in enumerate(batch))
        )
        client = self._get_client()
        response = await client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=0,
            response_format={"type": "json_object"},
        )

        translations = parse_translations(response.choices[0].message.content)

        mapping = {}
        for t in translations:
            eng = str(t["eng"]).upper().strip()
            kor = str(t["kor"]).strip()
            if is_korean(kor):
                mapping[eng] = kor
        return mapping
