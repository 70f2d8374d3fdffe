"""
IndexService
============

상위 메시지(APIS 매니페스트, PNR 예약)를 탑승객-항공편 문서로 색인하는 유스케이스 서비스.

Flow:
    Message → (passenger × flight) → Transformer → Indexer(upsert)

- 도메인은 **Port(인터페이스)** 에만 의존합니다. (DIP)
- 구현체는 adapters 레이어에서 주입(의존성 주입; DI)합니다.
- 쌍(pair) 단위 쓰기 실패는 로그를 남기고 결과에 기록한 뒤 다음 쌍을 계속 처리합니다.

예시:
    svc = IndexService(transformer, indexer)
    result = svc.index_manifest_message(message)
"""

from __future__ import annotations
import logging
from typing import Any, Dict, Iterable, List

from flightpax_api.app.domain.ports import IndexPort, TransformPort
from flightpax_api.app.domain.utils import identity_of
from flightpax_api.app.domain.models import (
    Flight,
    IndexErrorItem,
    IndexResult,
    ManifestMessage,
    Passenger,
    PayloadKind,
    ReservationMessage,
)
from flightpax_api.app.platform.exceptions import IndexingFailed, InvalidInput, ResourceNotFound

logger = logging.getLogger(__name__)


class IndexService:
    """메시지를 받아 탑승객-항공편 문서를 색인하는 유스케이스 서비스."""

    def __init__(self, transformer: TransformPort, indexer: IndexPort) -> None:
        """
        인덱스 서비스 초기화.
        Args:
            transformer: TransformPort: 색인 문서 변환
            indexer: IndexPort        : 색인 문서 적재
        """
        self._transformer = transformer
        self._indexer = indexer

    # ================= public API =================

    def index_manifest_message(self, message: ManifestMessage) -> IndexResult:
        """APIS 매니페스트 메시지를 색인한다."""
        return self.index(message.flights, message.passengers, apis=message.raw, manifest=message)

    def index_reservation_message(self, message: ReservationMessage) -> IndexResult:
        """PNR 예약 메시지를 색인한다. 예약의 주소 목록이 새 문서에 함께 기록된다."""
        return self.index(message.flights, message.passengers, pnr=message.raw, reservation=message)

    def index(
        self,
        flights: Iterable[Flight],
        passengers: Iterable[Passenger],
        apis: str | None = None,
        pnr: str | None = None,
        manifest: ManifestMessage | None = None,
        reservation: ReservationMessage | None = None) -> IndexResult:
        """
        탑승객 × 항공편 모든 쌍을 색인하는 메서드.

        - 문서가 없으면 전체 문서를 생성
        - 문서가 있으면 페이로드 필드(apis | pnr)만 병합
        Args:
            flights: 항공편 목록
            passengers: 탑승객 목록
            apis: 매니페스트 원문 (pnr과 둘 중 하나만)
            pnr: 예약 원문 (apis와 둘 중 하나만)
            manifest: 매니페스트 메시지
            reservation: 예약 메시지(주소 목록 제공)
        Returns:
            IndexResult: 성공 건수와 실패 상세
        """
        if (apis is None) == (pnr is None):
            raise InvalidInput("exactly one of apis or pnr payload is required")

        kind = PayloadKind.apis if apis is not None else PayloadKind.pnr
        raw = apis if apis is not None else pnr
        addresses = reservation.addresses if (kind is PayloadKind.pnr and reservation) else []
        flights = list(flights)
        passengers = list(passengers)

        logger.info("service.index: kind=%s passengers=%s flights=%s",
                    kind.value, len(passengers), len(flights),
                    extra={"payload_kind": kind.value})

        indexed = 0
        errors: List[IndexErrorItem] = []
        for passenger in passengers:
            for flight in flights:
                doc_id = identity_of(flight.id, passenger.id)
                document = self._transformer.transform(flight, passenger, kind, raw, addresses)
                try:
                    self._indexer.upsert(doc_id, document, kind)
                    indexed += 1
                except IndexingFailed as e:
                    logger.error("failed to index %s: %s", doc_id, e.reason,
                                 exc_info=True, extra={"doc_id": doc_id})
                    errors.append(IndexErrorItem(doc_id=doc_id, reason=e.reason))
        return IndexResult(indexed=indexed, errors=errors)

    def get_document(self, flight_id: int, passenger_id: int) -> Dict[str, Any]:
        """
        (항공편, 탑승객) 쌍의 저장된 문서를 조회한다.
        Raises:
            ResourceNotFound: 문서가 없는 경우
        """
        doc_id = identity_of(flight_id, passenger_id)
        document = self._indexer.get(doc_id)
        if document is None:
            raise ResourceNotFound(f"document {doc_id}")
        return document
