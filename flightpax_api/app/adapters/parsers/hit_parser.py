"""
OpenSearch 검색 응답(hits)을 결과 페이지로 변환하는 ParsePort 구현체.
"""

from __future__ import annotations
from typing import Any, Dict, List

from flightpax_api.app.adapters.searchers.opensearch_searcher import HIGHLIGHT_FIELDS
from flightpax_api.app.domain.ports import ParsePort
from flightpax_api.app.domain.utils import display_flight_number, parse_date, unique
from flightpax_api.app.domain.models import (
    Address,
    DocumentRecord,
    FlightPassengerResult,
    LinkPassengerResult,
    LinkResultPage,
    SearchResultPage,
)
from flightpax_api.app.platform.exceptions import ResultParseFailed

ADDRESS_KEYS = ("line1", "line2", "line3", "city", "state", "country", "postalCode")


class HitParser(ParsePort):

    def parse_search_page(self, response: Dict[str, Any]) -> SearchResultPage:
        """
        자유 텍스트 검색 응답을 SearchResultPage로 변환한다.
        날짜 포맷이 잘못된 hit가 하나라도 있으면 페이지 전체가 실패한다.
        Args:
            response: 엔진 원본 응답
        Returns:
            SearchResultPage
        Raises:
            ResultParseFailed: 날짜 파싱 실패
        """
        hits = response.get("hits", {})
        results = [self._to_result(hit.get("_source") or {}) for hit in hits.get("hits", [])]
        return SearchResultPage(results=results, total_hits=self._total_hits(hits))

    def parse_link_page(self, response: Dict[str, Any]) -> LinkResultPage:
        """
        연관 탑승객 검색 응답을 LinkResultPage로 변환한다.
        """
        hits = response.get("hits", {})
        results: List[LinkPassengerResult] = []
        for hit in hits.get("hits", []):
            source = hit.get("_source") or {}
            results.append(LinkPassengerResult(
                passenger_id=source.get("passengerId"),
                flight_id=source.get("flightId"),
                first_name=source.get("firstName"),
                middle_name=source.get("middleName"),
                last_name=source.get("lastName"),
                flight_number=display_flight_number(source.get("carrier"), source.get("flightNumber")),
                highlight_match=self.convert_highlights(hit.get("highlight") or {}),
            ))
        return LinkResultPage(results=results, total_hits=self._total_hits(hits))

    def convert_highlights(self, highlight: Dict[str, List[str]]) -> str:
        """
        필드별 하이라이트 조각을 사람이 읽을 수 있는 문자열 하나로 합친다.
        필드 순서: HIGHLIGHT_FIELDS 순서, 그 외 필드는 이름순.

        Field: lastName
        <빈 줄>
        Fragment: <em>Lee</em>...
        <빈 줄>
        ----
        """
        ordered = [f for f in HIGHLIGHT_FIELDS if f in highlight]
        ordered += sorted(f for f in highlight if f not in HIGHLIGHT_FIELDS)

        out: List[str] = []
        for field in ordered:
            out.append(f"Field: {field}\n")
            for fragment in highlight[field]:
                out.append(f"\nFragment: {fragment}... \n")
            out.append("\n---- \n")
        return "".join(out)

    # ================= internal helpers =================
    def _to_result(self, source: Dict[str, Any]) -> FlightPassengerResult:
        return FlightPassengerResult(
            passenger_id=source.get("passengerId"),
            flight_id=source.get("flightId"),
            passenger_type=source.get("passengerType"),
            first_name=source.get("firstName"),
            middle_name=source.get("middleName"),
            last_name=source.get("lastName"),
            flight_number=display_flight_number(source.get("carrier"), source.get("flightNumber")),
            origin=source.get("origin"),
            destination=source.get("destination"),
            addresses=self._to_addresses(source.get("addresses")),
            documents=self._to_documents(source.get("documents")),
            apis=source.get("apis"),
            pnr=source.get("pnr"),
        )

    def _to_addresses(self, raw: List[Dict[str, Any]] | None) -> List[Address]:
        if not raw:
            return []
        return unique(Address(**{k: m.get(k) for k in ADDRESS_KEYS}) for m in raw)

    def _to_documents(self, raw: List[Dict[str, Any]] | None) -> List[DocumentRecord]:
        if not raw:
            return []
        return unique(
            DocumentRecord(
                document_number=m.get("documentNumber"),
                document_type=m.get("documentType"),
                issuance_date=self._parse_date("issuanceDate", m.get("issuanceDate")),
                expiration_date=self._parse_date("expirationDate", m.get("expirationDate")),
                issuance_country=m.get("issuanceCountry"),
                first_name=m.get("firstName"),
                last_name=m.get("lastName"),
            )
            for m in raw
        )

    def _parse_date(self, field: str, value: Any):
        try:
            return parse_date(value)
        except (TypeError, ValueError) as e:
            raise ResultParseFailed(field, value, str(e)) from e

    def _total_hits(self, hits: Dict[str, Any]) -> int:
        # OpenSearch 1.x 이상은 {"value": n, "relation": "eq"}, 예전 버전은 정수
        total = hits.get("total", 0)
        if isinstance(total, dict):
            return int(total.get("value", 0))
        return int(total or 0)
