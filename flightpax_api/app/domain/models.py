"""
도메인 모델 정의.

- Flight / Passenger / TravelDocument / Address: 상위 메시지가 실어 오는 원천 레코드
- ManifestMessage / ReservationMessage: 두 종류의 상위 메시지(APIS 매니페스트, PNR 예약)
- FlightPassengerDocument: 검색 엔진에 적재되는 “탑승객-항공편” 단위 문서
- FlightPassengerResult / LinkPassengerResult: 검색 결과 레코드
- SearchResultPage / LinkResultPage: 페이지 단위 검색 결과
- IndexResult: 인덱싱 결과 요약

Pydantic v2 기반 모델이라 검증/직렬화가 용이합니다.
색인 문서는 camelCase 필드명으로 저장되므로 alias_generator(to_camel)를 사용합니다.
"""

from __future__ import annotations

from enum import Enum
from typing import Any
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_serializer, model_validator
from pydantic.alias_generators import to_camel


JSONDict = dict[str, Any]

# 색인 문서의 날짜 포맷 (yyyy-MM-dd'T'HH:mm)
DATE_FORMAT = "%Y-%m-%dT%H:%M"


class SortDirection(str, Enum):
    """정렬 방향. 알 수 없는 값은 내림차순으로 취급한다."""
    asc = "asc"
    desc = "desc"

    @classmethod
    def parse(cls, value: str | None) -> "SortDirection":
        """
        대소문자 구분 없이 "asc"면 오름차순, 그 외 모든 문자열(빈 문자열 포함)은 내림차순.
        Args:
            value: 정렬 방향 문자열
        Returns:
            SortDirection
        """
        if value is not None and value.lower() == cls.asc.value:
            return cls.asc
        return cls.desc


class PayloadKind(str, Enum):
    """원문 페이로드 종류. 값은 색인 문서의 필드명과 같다."""
    apis = "apis"
    pnr = "pnr"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ================= 원천 레코드 =================

class Address(_CamelModel):
    """주소. 모든 필드가 같으면 같은 주소로 본다(구조적 동일성)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    line1: str | None = None
    line2: str | None = None
    line3: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    postal_code: str | None = None


class DocumentOwner(_CamelModel):
    """여행 문서를 소유한 탑승객의 이름."""
    first_name: str | None = None
    last_name: str | None = None


class TravelDocument(_CamelModel):
    """여권/비자 등 여행 문서."""
    document_number: str = Field(..., description="문서 번호")
    document_type: str | None = Field(None, description="문서 유형(P, V 등)")
    issuance_date: datetime | None = None
    expiration_date: datetime | None = None
    issuance_country: str | None = None
    owner: DocumentOwner | None = Field(
        None, description="문서 소유 탑승객. 비어 있으면 소속 탑승객으로 채워진다"
    )


class Passenger(_CamelModel):
    id: int = Field(..., ge=0, description="탑승객 식별자")
    passenger_type: str | None = None
    first_name: str | None = None
    middle_name: str | None = None
    last_name: str | None = None
    documents: list[TravelDocument] = Field(default_factory=list)

    @model_validator(mode="after")
    def _stamp_document_owner(self) -> "Passenger":
        # 소유자가 명시되지 않은 문서는 로딩 시점에 소속 탑승객을 소유자로 기록
        for doc in self.documents:
            if doc.owner is None:
                doc.owner = DocumentOwner(first_name=self.first_name, last_name=self.last_name)
        return self


class Flight(_CamelModel):
    id: int = Field(..., ge=0, description="항공편 식별자")
    carrier: str | None = Field(None, description="항공사 코드")
    flight_number: str | None = Field(None, description="편명(항공사 코드 제외)")
    origin: str | None = None
    destination: str | None = None


class ManifestMessage(_CamelModel):
    """APIS 매니페스트 메시지."""
    raw: str = Field(..., description="원문 페이로드")
    flights: list[Flight] = Field(default_factory=list)
    passengers: list[Passenger] = Field(default_factory=list)


class ReservationMessage(_CamelModel):
    """PNR 예약 메시지. 예약에 포함된 주소 목록을 함께 싣는다."""
    raw: str = Field(..., description="원문 페이로드")
    flights: list[Flight] = Field(default_factory=list)
    passengers: list[Passenger] = Field(default_factory=list)
    addresses: list[Address] = Field(default_factory=list)


# ================= 색인 문서 =================

class DocumentRecord(_CamelModel):
    """색인/검색 결과에 실리는 여행 문서. 소유자 이름을 함께 비정규화한다."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    document_number: str | None = None
    document_type: str | None = None
    issuance_date: datetime | None = None
    expiration_date: datetime | None = None
    issuance_country: str | None = None
    first_name: str | None = None
    last_name: str | None = None

    @field_serializer("issuance_date", "expiration_date")
    def _format_date(self, value: datetime | None) -> str | None:
        return value.strftime(DATE_FORMAT) if value is not None else None


class FlightPassengerDocument(_CamelModel):
    """
    (flightId, passengerId) 쌍 1건과 1:1로 매핑되는 색인 문서.
    OpenSearch 매핑(resources/schema/flightpax_index.json):
      - flightId/passengerId: long
      - firstName/middleName/lastName/passengerType: text
      - carrier/flightNumber/origin/destination: text
      - documents/addresses: object 배열
      - apis/pnr: text (원문 페이로드, 각각 한 번의 색인 이벤트로 채워짐)
    """
    flight_id: int
    passenger_id: int
    passenger_type: str | None = None
    first_name: str | None = None
    middle_name: str | None = None
    last_name: str | None = None
    carrier: str | None = None
    flight_number: str | None = None
    origin: str | None = None
    destination: str | None = None
    documents: list[DocumentRecord] = Field(default_factory=list)
    addresses: list[Address] = Field(default_factory=list)
    apis: str | None = None
    pnr: str | None = None


# ================= 검색 결과 =================

class FlightPassengerResult(BaseModel):
    passenger_id: int | None = None
    flight_id: int | None = None
    passenger_type: str | None = None
    first_name: str | None = None
    middle_name: str | None = None
    last_name: str | None = None
    flight_number: str | None = Field(None, description="항공사 코드 + 편명")
    origin: str | None = None
    destination: str | None = None
    addresses: list[Address] = Field(default_factory=list)
    documents: list[DocumentRecord] = Field(default_factory=list)
    apis: str | None = None
    pnr: str | None = None


class SearchResultPage(BaseModel):
    results: list[FlightPassengerResult] = Field(default_factory=list)
    total_hits: int = Field(0, ge=0, description="전체 매칭 건수(페이지 크기보다 클 수 있음)")


class LinkPassengerResult(BaseModel):
    passenger_id: int | None = None
    flight_id: int | None = None
    first_name: str | None = None
    middle_name: str | None = None
    last_name: str | None = None
    flight_number: str | None = None
    highlight_match: str = Field("", description="매칭 필드별 하이라이트 조각")


class LinkResultPage(BaseModel):
    results: list[LinkPassengerResult] = Field(default_factory=list)
    total_hits: int = Field(0, ge=0)


# ================= 인덱싱 결과 =================

class IndexErrorItem(BaseModel):
    """인덱싱 실패 항목 요약."""
    doc_id: str
    reason: str


class IndexResult(BaseModel):
    """인덱싱 실행 결과."""
    indexed: int = Field(..., ge=0)
    errors: list[IndexErrorItem] = Field(default_factory=list)


class ApiResponse(BaseModel):
    """API 공통 응답."""
    success: bool = Field(..., description="성공 여부")
    message: str = Field(..., description="결과 메시지")
    data: Any = Field(None, description="결과 데이터")
