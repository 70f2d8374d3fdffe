from datetime import datetime
import pytest

from flightpax_api.app.domain.models import (
    Address,
    DocumentOwner,
    DocumentRecord,
    FlightPassengerDocument,
    Passenger,
    PayloadKind,
    SortDirection,
    TravelDocument,
)


@pytest.mark.parametrize("value", ["asc", "ASC", "Asc", "aSc"])
def test_sort_direction_asc_variants(value):
    """'asc'는 대소문자와 무관하게 오름차순"""
    assert SortDirection.parse(value) is SortDirection.asc


@pytest.mark.parametrize("value", ["", "desc", "DESC", "descending", "ascending", "up", None])
def test_sort_direction_everything_else_is_desc(value):
    """그 외 모든 값은 에러 없이 내림차순"""
    assert SortDirection.parse(value) is SortDirection.desc


def test_payload_kind_values_are_field_names():
    assert PayloadKind.apis.value == "apis"
    assert PayloadKind("pnr") is PayloadKind.pnr


def test_passenger_stamps_missing_document_owner():
    """
    소유자가 없는 문서는 소속 탑승객 이름으로 채워지고,
    명시된 소유자는 그대로 유지되어야 한다.
    """
    p = Passenger(
        id=3,
        first_name="ANN",
        last_name="LEE",
        documents=[
            TravelDocument(document_number="X1"),
            TravelDocument(document_number="X2", owner=DocumentOwner(first_name="BOB", last_name="KIM")),
        ],
    )
    assert p.documents[0].owner == DocumentOwner(first_name="ANN", last_name="LEE")
    assert p.documents[1].owner == DocumentOwner(first_name="BOB", last_name="KIM")


def test_passenger_rejects_negative_id():
    with pytest.raises(ValueError):
        Passenger(id=-1)


def test_passenger_accepts_camel_case_payload():
    p = Passenger.model_validate({
        "id": 1,
        "firstName": "ANN",
        "lastName": "LEE",
        "documents": [{"documentNumber": "X1", "expirationDate": "2025-03-01T09:30:00"}],
    })
    assert p.first_name == "ANN"
    assert p.documents[0].expiration_date == datetime(2025, 3, 1, 9, 30)


def test_address_structural_identity():
    """필드가 모두 같은 주소는 같은 주소(set에서 하나로 합쳐짐)"""
    a1 = Address(line1="1 MAIN ST", city="SEOUL")
    a2 = Address(line1="1 MAIN ST", city="SEOUL")
    a3 = Address(line1="2 MAIN ST", city="SEOUL")
    assert a1 == a2
    assert len({a1, a2, a3}) == 2


def test_document_record_serializes_dates_with_fixed_format():
    r = DocumentRecord(
        document_number="X1",
        issuance_date=datetime(2015, 3, 1, 9, 30, 45),
        expiration_date=None,
    )
    dumped = r.model_dump(mode="json", by_alias=True)
    assert dumped["issuanceDate"] == "2015-03-01T09:30"
    assert dumped["expirationDate"] is None


def test_flight_passenger_document_dumps_camel_case_without_nulls():
    d = FlightPassengerDocument(flight_id=9, passenger_id=1, last_name="LEE", apis="RAW")
    dumped = d.model_dump(mode="json", by_alias=True, exclude_none=True)
    assert dumped["flightId"] == 9
    assert dumped["passengerId"] == 1
    assert dumped["lastName"] == "LEE"
    assert dumped["apis"] == "RAW"
    assert "pnr" not in dumped
    assert dumped["documents"] == [] and dumped["addresses"] == []
