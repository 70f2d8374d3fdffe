"""
도메인 포트(추상 인터페이스).

애플리케이션 서비스(유스케이스)는 아래 포트들(추상)에만 의존합니다.
구체 구현은 adapters 레이어에서 제공하고, FastAPI DI로 주입합니다.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Protocol

from .models import (
    Address,
    Flight,
    FlightPassengerDocument,
    LinkResultPage,
    Passenger,
    PayloadKind,
    SearchResultPage,
)


class TransformPort(Protocol):
    """탑승객 + 항공편 + 원문 페이로드를 색인 문서로 변환."""

    def transform(
        self,
        flight: Flight,
        passenger: Passenger,
        kind: PayloadKind,
        raw: str,
        addresses: Iterable[Address] = (),
    ) -> FlightPassengerDocument:
        ...


class IndexPort(Protocol):
    """
    색인 문서를 타겟 인덱스에 적재.
    문서가 없으면 전체 문서를 생성하고, 있으면 페이로드 필드 하나만 병합한다.
    """

    def ensure_index(self) -> str:
        ...

    def upsert(self, doc_id: str, document: FlightPassengerDocument, kind: PayloadKind) -> None:
        """
        Raises:
            IndexingFailed: 엔진 쓰기 실패
        """
        ...

    def get(self, doc_id: str) -> Dict[str, Any] | None:
        ...


class SearchPort(Protocol):
    """
    검색 쿼리를 구성해 엔진에 요청하고, 엔진 원본 응답을 돌려준다.
    """

    def search_passengers(
        self,
        query: str,
        page: int,
        page_size: int,
        sort_field: str,
        sort_direction: str,
        explain: bool = False,
    ) -> Dict[str, Any]:
        ...

    def find_passenger_links(
        self,
        passenger: Passenger,
        page: int,
        page_size: int,
        sort_field: str,
        sort_direction: str,
        explain: bool = False,
    ) -> Dict[str, Any]:
        ...


class ParsePort(Protocol):
    """엔진 원본 응답(hits)을 결과 페이지로 변환."""

    def parse_search_page(self, response: Dict[str, Any]) -> SearchResultPage:
        ...

    def parse_link_page(self, response: Dict[str, Any]) -> LinkResultPage:
        ...
