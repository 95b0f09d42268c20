"""파서 모듈"""

from .mfds_parser import MFDSCandidateParser, find_new_drug_flag, parse_permit_date

__all__ = [
    "MFDSCandidateParser",
    "find_new_drug_flag",
    "parse_permit_date",
]
