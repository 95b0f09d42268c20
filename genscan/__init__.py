"""genscan: 의약품 제품명 매칭 및 성분별 오리지널/제네릭 집계"""

__version__ = "0.1.0"
