# app/domain/services/search_service.py
"""
SearchService
==============

검색 유스케이스 오케스트레이터.

Flow:
    Searcher(쿼리 구성 + 엔진 검색) → Parser(결과 페이지 변환)

- 엔진 예외와 결과 변환 실패(ResultParseFailed)는 그대로 호출자에게 전파합니다.
"""

from __future__ import annotations
import logging

from flightpax_api.app.domain.ports import ParsePort, SearchPort
from flightpax_api.app.domain.models import LinkResultPage, Passenger, SearchResultPage

logger = logging.getLogger(__name__)

class SearchService:

    def __init__(
        self,
        searcher: SearchPort,
        parser: ParsePort) -> None:
        self._searcher = searcher
        self._parser = parser

    # ================= public API =================
    def search_passengers(
        self,
        query: str,
        page: int = 1,
        page_size: int = 10,
        sort_field: str = "_score",
        sort_direction: str = "desc",
        explain: bool = False) -> SearchResultPage:
        """
        자유 텍스트 검색을 수행하는 메서드.
        Args:
            query: str          : 검색 쿼리
            page: int           : 페이지 번호(1부터)
            page_size: int      : 페이지 크기
            sort_field: str     : 정렬 필드
            sort_direction: str : 정렬 방향
            explain: bool       : 검색 결과 설명 포함 여부
        Returns:
            SearchResultPage: 검색 결과와 전체 건수
        """
        logger.info("service.search_passengers: query=%s page=%s size=%s", query, page, page_size)
        response = self._searcher.search_passengers(
            query, page, page_size, sort_field, sort_direction, explain)
        result = self._parser.parse_search_page(response)
        logger.info("service.search_passengers: total_hits=%s", result.total_hits,
                    extra={"total_hits": result.total_hits})
        return result

    def find_passenger_links(
        self,
        passenger: Passenger,
        page: int = 1,
        page_size: int = 10,
        sort_field: str = "_score",
        sort_direction: str = "desc",
        explain: bool = False) -> LinkResultPage:
        """
        이름/여행 문서 번호가 겹치는 연관 탑승객을 찾는 메서드.
        """
        logger.info("service.find_passenger_links: passenger=%s page=%s size=%s",
                    passenger.id, page, page_size)
        response = self._searcher.find_passenger_links(
            passenger, page, page_size, sort_field, sort_direction, explain)
        return self._parser.parse_link_page(response)
