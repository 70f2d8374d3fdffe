"""
탑승객 + 항공편 + 원문 페이로드를 색인 단위인 FlightPassengerDocument로 변환하는 TransformPort 구현체.
"""

from __future__ import annotations
from typing import Iterable, List

from flightpax_api.app.domain.ports import TransformPort
from flightpax_api.app.domain.utils import unique
from flightpax_api.app.domain.models import (
    Address,
    DocumentRecord,
    Flight,
    FlightPassengerDocument,
    Passenger,
    PayloadKind,
    TravelDocument,
)


class FlightPaxTransformer(TransformPort):

    def transform(
        self,
        flight: Flight,
        passenger: Passenger,
        kind: PayloadKind,
        raw: str,
        addresses: Iterable[Address] = ()) -> FlightPassengerDocument:
        """
        (항공편, 탑승객) 쌍 1건을 색인 문서로 변환하는 메서드.
        - 매핑 규칙:
            passenger.id -> passengerId
            passenger 이름/유형 -> firstName, middleName, lastName, passengerType
            flight.id -> flightId
            flight 항공사/편명/출발/도착 -> carrier, flightNumber, origin, destination
            passenger.documents -> documents (문서 소유자의 이름을 함께 기록)
            raw -> apis 또는 pnr (kind에 따라 하나만)
            addresses -> addresses (PNR인 경우에만)
        Args:
            flight: Flight
            passenger: Passenger
            kind: PayloadKind (apis | pnr)
            raw: 원문 페이로드
            addresses: 예약 메시지의 주소 목록
        Returns:
            FlightPassengerDocument
        """
        doc = FlightPassengerDocument(
            flight_id=flight.id,
            passenger_id=passenger.id,
            passenger_type=passenger.passenger_type,
            first_name=passenger.first_name,
            middle_name=passenger.middle_name,
            last_name=passenger.last_name,
            carrier=flight.carrier,
            flight_number=flight.flight_number,
            origin=flight.origin,
            destination=flight.destination,
            documents=self._to_document_records(passenger.documents),
        )
        if kind is PayloadKind.apis:
            doc.apis = raw
        else:
            doc.pnr = raw
            doc.addresses = unique(addresses)
        return doc

    def _to_document_records(self, documents: Iterable[TravelDocument]) -> List[DocumentRecord]:
        """
        여행 문서를 색인용 레코드로 변환한다.
        이름은 색인 중인 탑승객이 아니라 문서 소유자(owner)의 이름을 사용한다.
        """
        records = []
        for d in documents:
            owner = d.owner
            records.append(DocumentRecord(
                document_number=d.document_number,
                document_type=d.document_type,
                issuance_date=d.issuance_date,
                expiration_date=d.expiration_date,
                issuance_country=d.issuance_country,
                first_name=owner.first_name if owner else None,
                last_name=owner.last_name if owner else None,
            ))
        return unique(records)
