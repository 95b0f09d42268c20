"""LLM 보조 기능 (영문 제품명 번역)"""

from .translator import DrugNameTranslator, parse_translations

__all__ = ["DrugNameTranslator", "parse_translations"]
