"""후보 공급자 / 입력 수집 모듈"""

from .local import KOR_DOSAGE_FORMS, MFDSLocalDataset, strip_dosage_form
from .mfds import MFDSAPIError, MFDSClient, MFDSRemoteSupplier, normalize_items
from .spreadsheet import read_input_rows, rows_from_dataframe

__all__ = [
    # 로컬 엑셀
    "KOR_DOSAGE_FORMS",
    "MFDSLocalDataset",
    "strip_dosage_form",
    # MFDS API
    "MFDSAPIError",
    "MFDSClient",
    "MFDSRemoteSupplier",
    "normalize_items",
    # 입력 파일
    "read_input_rows",
    "rows_from_dataframe",
]
