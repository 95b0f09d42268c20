"""영문 제품명 번역 테스트 (OpenAI 클라이언트 mock)"""

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from genscan.ai import DrugNameTranslator, parse_translations


def _response(payload):
    content = payload if isinstance(payload, str) else json.dumps(payload, ensure_ascii=False)
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _translator(create, batch_size=50):
    translator = DrugNameTranslator(api_key="test-key", model="test-model", batch_size=batch_size)
    client = MagicMock()
    client.chat.completions.create = create
    translator._client = client
    return translator


class TestParseTranslations:

    def test_object(self):
        content = '{"translations": [{"eng": "HUMIRA", "kor": "휴미라"}]}'
        assert parse_translations(content) == [{"eng": "HUMIRA", "kor": "휴미라"}]

    def test_code_fence_and_list(self):
        content = '```json\n[{"eng": "ENBREL", "kor": "엔브렐"}, {"eng": "X"}]\n```'
        assert parse_translations(content) == [{"eng": "ENBREL", "kor": "엔브렐"}]

    def test_empty(self):
        assert parse_translations("") == []
        assert parse_translations(None) == []


class TestDrugNameTranslator:
    """DrugNameTranslator 테스트"""

    @pytest.mark.asyncio
    async def test_translate(self):
        create = AsyncMock(return_value=_response({"translations": [
            {"eng": "humira", "kor": "휴미라"},
            {"eng": "UNKNOWNDRUG", "kor": "UNKNOWNDRUG"},
        ]}))
        translator = _translator(create)

        result = await translator.translate(["HUMIRA", "UNKNOWNDRUG"])

        assert result == {"HUMIRA": "휴미라"}
        kwargs = create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["temperature"] == 0
        assert "1. HUMIRA" in kwargs["messages"][0]["content"]

    @pytest.mark.asyncio
    async def test_batches(self):
        create = AsyncMock(side_effect=[
            _response([{"eng": "HUMIRA", "kor": "휴미라"}]),
            _response([{"eng": "ENBREL", "kor": "엔브렐"}]),
        ])
        translator = _translator(create, batch_size=1)

        result = await translator.translate(["HUMIRA", "ENBREL"])

        assert result == {"HUMIRA": "휴미라", "ENBREL": "엔브렐"}
        assert create.await_count == 2

    @pytest.mark.asyncio
    async def test_batch_failure_is_skipped(self):
        create = AsyncMock(side_effect=[
            RuntimeError("rate limited"),
            _response([{"eng": "ENBREL", "kor": "엔브렐"}]),
        ])
        translator = _translator(create, batch_size=1)

        assert await translator.translate(["HUMIRA", "ENBREL"]) == {"ENBREL": "엔브렐"}

    @pytest.mark.asyncio
    async def test_no_api_key(self):
        translator = DrugNameTranslator()
        translator.api_key = None
        assert await translator.translate(["HUMIRA"]) == {}

    @pytest.mark.asyncio
    async def test_empty_input(self):
        create = AsyncMock()
        assert await _translator(create).translate([]) == {}
        create.assert_not_awaited()
