"""결과 리포트 모듈"""

from .export import RESULT_COLUMNS, UNMATCHED_COLUMNS, export_result, to_dataframes

__all__ = [
    "RESULT_COLUMNS",
    "UNMATCHED_COLUMNS",
    "export_result",
    "to_dataframes",
]
