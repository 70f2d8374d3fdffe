"""
유틸리티 함수.
"""

from datetime import datetime
from typing import Hashable, Iterable, List, TypeVar

from flightpax_api.app.domain.models import DATE_FORMAT

T = TypeVar("T", bound=Hashable)


def identity_of(flight_id: int, passenger_id: int) -> str:
    """
    (항공편, 탑승객) 쌍의 색인 문서 ID를 만드는 함수.
    10진수 표기, 구분자 '-' (예: 9-1)
    Args:
        flight_id: int
        passenger_id: int
    Returns:
        str: 문서 ID
    """
    return "%d-%d" % (flight_id, passenger_id)


def display_flight_number(carrier: str | None, flight_number: str | None) -> str | None:
    """
    항공사 코드와 편명을 이어 붙여 화면 표시용 편명을 만드는 함수.
    둘 다 없으면 None.
    """
    parts = [p for p in (carrier, flight_number) if p]
    return "".join(parts) if parts else None


def parse_date(value: str | None) -> datetime | None:
    """
    색인 문서의 날짜 문자열(yyyy-MM-dd'T'HH:mm)을 datetime으로 변환하는 함수.
    Args:
        value: 날짜 문자열 또는 None
    Returns:
        datetime | None
    Raises:
        ValueError: 포맷이 맞지 않는 경우
    """
    if value is None:
        return None
    return datetime.strptime(value, DATE_FORMAT)


def unique(items: Iterable[T]) -> List[T]:
    """순서를 유지하며 중복을 제거한다."""
    return list(dict.fromkeys(items))
