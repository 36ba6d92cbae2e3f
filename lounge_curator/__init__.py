"""Lounge Curator.

라운지별 관련성 스코어링과 일일 뉴스 다이제스트 큐레이션 코어.
"""

__version__ = "0.1.0"
