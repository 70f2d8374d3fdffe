import sys
from pathlib import Path

# 프로젝트 루트 경로를 sys.path에 추가 (…/<project-root>)
ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import copy
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from opensearchpy.exceptions import NotFoundError

from flightpax_api.app.main import app
from flightpax_api.app.domain.models import (
    Address,
    Flight,
    ManifestMessage,
    Passenger,
    ReservationMessage,
    TravelDocument,
)


@pytest.fixture(scope="session")
def client():
    return TestClient(app, raise_server_exceptions=False)


# ---------------------------
# 도메인 픽스처
# ---------------------------
@pytest.fixture
def flight():
    return Flight(id=9, carrier="KE", flight_number="017", origin="ICN", destination="LAX")


@pytest.fixture
def passenger():
    return Passenger(
        id=1,
        passenger_type="P",
        first_name="ANN",
        middle_name="J",
        last_name="LEE",
        documents=[
            TravelDocument(
                document_number="X1",
                document_type="P",
                issuance_date=datetime(2015, 3, 1, 9, 30),
                expiration_date=datetime(2025, 3, 1, 9, 30),
                issuance_country="KOR",
            ),
        ],
    )


@pytest.fixture
def address():
    return Address(line1="1 MAIN ST", city="SEOUL", country="KOR", postal_code="04524")


@pytest.fixture
def manifest_message(flight, passenger):
    return ManifestMessage(raw="UNA:+.? 'UNB+UNOA:4+APIS*ABE", flights=[flight], passengers=[passenger])


@pytest.fixture
def reservation_message(flight, passenger, address):
    return ReservationMessage(
        raw="RECLOC ABC123 LEE/ANN X1",
        flights=[flight],
        passengers=[passenger],
        addresses=[address, address.model_copy()],
    )


# ---------------------------
# 인메모리 OpenSearch 대역
# ---------------------------
class FakeOpenSearch:
    """
    update(doc + upsert) / get / search 만 흉내내는 OpenSearch 대역.
    - update: 문서가 없으면 upsert 바디로 생성, 있으면 doc 바디를 얕게 병합
    - search: multi_match 검색어 토큰이 문서의 문자열 값 중 하나에 포함되면 매칭
    """

    def __init__(self):
        self.store: dict[str, dict] = {}
        self.update_calls: list[dict] = []

    def update(self, index, id, body, **params):
        self.update_calls.append({"index": index, "id": id, "body": body, **params})
        if id in self.store:
            self.store[id].update(copy.deepcopy(body["doc"]))
        else:
            self.store[id] = copy.deepcopy(body["upsert"])
        return {"_id": id, "result": "updated"}

    def get(self, index, id, **params):
        if id not in self.store:
            raise NotFoundError(404, "not_found", {"found": False})
        return {"_id": id, "found": True, "_source": copy.deepcopy(self.store[id])}

    def search(self, index, body, **params):
        tokens = body["query"]["multi_match"]["query"].lower().split()
        matched = [
            (doc_id, src) for doc_id, src in self.store.items()
            if any(t in value.lower() for t in tokens for value in self._strings(src))
        ]
        for sort in reversed(body.get("sort", [])):
            (field, spec), = sort.items()
            matched.sort(key=lambda item: str(item[1].get(field, "")), reverse=spec["order"] == "desc")
        page = matched[body["from"]: body["from"] + body["size"]]
        return {
            "hits": {
                "total": {"value": len(matched), "relation": "eq"},
                "hits": [{"_id": i, "_score": 1.0, "_source": copy.deepcopy(s)} for i, s in page],
            }
        }

    def _strings(self, value):
        if isinstance(value, str):
            yield value
        elif isinstance(value, dict):
            for v in value.values():
                yield from self._strings(v)
        elif isinstance(value, list):
            for v in value:
                yield from self._strings(v)


@pytest.fixture
def fake_opensearch():
    return FakeOpenSearch()
