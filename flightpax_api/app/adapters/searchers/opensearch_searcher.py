"""
자유 텍스트 검색 / 연관 탑승객(link analysis) 검색 쿼리를 구성해 OpenSearch에 요청하는 SearchPort 구현체.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List
from opensearchpy import OpenSearch
from flightpax_api.app.domain.ports import SearchPort
from flightpax_api.app.domain.models import Passenger, SortDirection
from flightpax_api.app.platform.exceptions import InvalidInput

logger = logging.getLogger(__name__)

# 자유 텍스트 검색 대상 필드
FREE_TEXT_FIELDS = (
    "apis", "pnr", "firstName", "lastName", "carrier",
    "flightNumber", "origin", "destination", "addresses", "documents",
)
# object 배열 필드는 하위 필드 전체를 대상으로 한다
OBJECT_FIELDS = {"addresses", "documents"}

# 연관 탑승객 검색 하이라이트 필드 (결과 조합 순서와 같다)
HIGHLIGHT_FIELDS = ("documents.documentNumber", "lastName", "firstName", "pnr")


class OpenSearchSearcher(SearchPort):

    def __init__(self, client: OpenSearch, index_name: str) -> None:
        self.client = client
        self.index_name = index_name

    def search_passengers(
        self,
        query: str,
        page: int,
        page_size: int,
        sort_field: str,
        sort_direction: str,
        explain: bool = False) -> Dict[str, Any]:
        """
        자유 텍스트 검색을 수행하여 엔진 원본 응답을 반환한다.

        Args:
            query (str): 검색어
            page (int): 페이지 번호(1부터)
            page_size (int): 페이지 크기
            sort_field (str): 정렬 필드
            sort_direction (str): 정렬 방향("asc"면 오름차순, 그 외 내림차순)
            explain (bool): 검색 결과 설명 포함 여부 (기본 False)
        Returns:
            Dict[str, Any]: 검색 결과(hits, total, took, timed_out)
        """
        body = self.build_free_text_query(query, page, page_size, sort_field, sort_direction, explain)
        return self._search(body)

    def find_passenger_links(
        self,
        passenger: Passenger,
        page: int,
        page_size: int,
        sort_field: str,
        sort_direction: str,
        explain: bool = False) -> Dict[str, Any]:
        """
        주어진 탑승객과 이름/여행 문서 번호가 겹치는 탑승객을 검색한다.
        """
        body = self.build_link_query(passenger, page, page_size, sort_field, sort_direction, explain)
        return self._search(body)

    def build_free_text_query(
        self,
        query: str,
        page: int,
        page_size: int,
        sort_field: str,
        sort_direction: str,
        explain: bool = False) -> Dict[str, Any]:
        """
        고정 필드 전체를 대상으로 하는 multi_match(most_fields) 쿼리 바디를 구성한다.
        가장 많은 필드가 매칭될수록 점수가 높아진다(best_fields 아님).
        """
        body = {
            "query": {
                "multi_match": {
                    "query": query,
                    "fields": self._expand_fields(FREE_TEXT_FIELDS),
                    "type": "most_fields",
                    # 날짜/숫자 하위 필드에 텍스트가 들어와도 실패하지 않도록
                    "lenient": True,
                }
            },
        }
        return self._paginate(body, page, page_size, sort_field, sort_direction, explain)

    def build_link_query(
        self,
        passenger: Passenger,
        page: int,
        page_size: int,
        sort_field: str,
        sort_direction: str,
        explain: bool = False) -> Dict[str, Any]:
        """
        연관 탑승객 검색 쿼리 바디를 구성한다.
        아래 should 절 중 하나만 만족해도 후보가 된다(OR).
          a. firstName, lastName 모두 일치 (must)
          b. 여행 문서 번호가 documents.documentNumber 에 포함
          c. 여행 문서 번호가 pnr 원문에 포함
          d. 성(lastName)이 pnr 원문에 포함
        """
        doc_numbers: List[str] = [d.document_number for d in passenger.documents]
        body = {
            "query": {
                "bool": {
                    "should": [
                        {
                            "bool": {
                                "must": [
                                    {"match": {"firstName": passenger.first_name}},
                                    {"match": {"lastName": passenger.last_name}},
                                ]
                            }
                        },
                        {"terms": {"documents.documentNumber": doc_numbers}},
                        {"terms": {"pnr": doc_numbers}},
                        {"match": {"pnr": passenger.last_name}},
                    ]
                }
            },
            "highlight": {
                "fields": {field: {} for field in HIGHLIGHT_FIELDS}
            },
        }
        return self._paginate(body, page, page_size, sort_field, sort_direction, explain)

    def _paginate(
        self,
        body: Dict[str, Any],
        page: int,
        page_size: int,
        sort_field: str,
        sort_direction: str,
        explain: bool) -> Dict[str, Any]:
        """
        페이지/정렬 파라미터를 쿼리 바디에 추가한다.
        from = (page - 1) * page_size
        """
        if page < 1:
            raise InvalidInput(f"page must be >= 1: {page}")
        if page_size < 1:
            raise InvalidInput(f"page_size must be > 0: {page_size}")
        order = SortDirection.parse(sort_direction)
        body["from"] = (page - 1) * page_size
        body["size"] = page_size
        body["sort"] = [{sort_field: {"order": order.value}}]
        body["explain"] = explain
        return body

    def _expand_fields(self, fields) -> List[str]:
        return [f"{f}.*" if f in OBJECT_FIELDS else f for f in fields]

    def _search(self, body: Dict[str, Any]) -> Dict[str, Any]:
        logger.info("search: index=%s from=%s size=%s", self.index_name, body["from"], body["size"],
                    extra={"index": self.index_name})
        return self.client.search(
            index=self.index_name,
            body=body,
            search_type="query_then_fetch")
