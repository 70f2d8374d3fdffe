# flightpax_api/tests/unit/adapters/indexers/test_opensearch_indexer.py

from unittest.mock import MagicMock, patch
import pytest
from opensearchpy.exceptions import ConnectionError, ConflictError, NotFoundError

from flightpax_api.app.adapters.indexers.opensearch_indexer import OpenSearchIndexer
from flightpax_api.app.domain.models import FlightPassengerDocument, PayloadKind
from flightpax_api.app.platform.exceptions import IndexingFailed
"""
_load_index_schema: 패키지의 스키마 JSON 로드
ensure_index: 인덱스 존재/미존재 분기, indices.create 호출 여부 검증
upsert: update 바디(doc=페이로드 필드, upsert=전체 문서), retry_on_conflict 전달, 실패 시 IndexingFailed
get: 문서 조회, NotFoundError → None
"""


# ----------------------
# 공용 픽스처
# ----------------------
@pytest.fixture
def mock_client():
    """OpenSearch 클라이언트 목 객체 (indices 네임스페이스 포함)"""
    client = MagicMock()
    client.indices = MagicMock()
    return client


@pytest.fixture
def indexer(mock_client):
    """_load_index_schema를 우회해서 파일 접근 없이 indexer 생성"""
    with patch.object(OpenSearchIndexer, "_load_index_schema"):
        inst = OpenSearchIndexer(client=mock_client, index_name="gtas", retry_on_conflict=5)
        inst.index_schema = {"settings": {}, "mappings": {}}
    return inst


@pytest.fixture
def document():
    return FlightPassengerDocument(flight_id=9, passenger_id=1, last_name="LEE", apis="APIS RAW")


# ----------------------
# schema
# ----------------------
def test_load_index_schema_from_resources(mock_client):
    inst = OpenSearchIndexer(client=mock_client, index_name="gtas")
    props = inst.index_schema["mappings"]["properties"]
    for field in ("flightId", "passengerId", "apis", "pnr", "documents", "addresses"):
        assert field in props
    assert props["documents"]["properties"]["documentNumber"]["type"] == "keyword"


# ----------------------
# ensure_index
# ----------------------
def test_ensure_index_when_not_exists(indexer: OpenSearchIndexer, mock_client: MagicMock):
    mock_client.indices.exists.return_value = False

    name = indexer.ensure_index()

    assert name == "gtas"
    mock_client.indices.exists.assert_called_once_with(index="gtas")
    mock_client.indices.create.assert_called_once_with(index="gtas", body=indexer.index_schema)


def test_ensure_index_when_exists(indexer: OpenSearchIndexer, mock_client: MagicMock):
    mock_client.indices.exists.return_value = True

    assert indexer.ensure_index() == "gtas"
    mock_client.indices.create.assert_not_called()


# ----------------------
# upsert
# ----------------------
def test_upsert_sends_payload_doc_and_full_upsert(indexer: OpenSearchIndexer, mock_client: MagicMock, document):
    indexer.upsert("9-1", document, PayloadKind.apis)

    mock_client.update.assert_called_once()
    kwargs = mock_client.update.call_args.kwargs
    assert kwargs["index"] == "gtas"
    assert kwargs["id"] == "9-1"
    assert kwargs["retry_on_conflict"] == 5
    body = kwargs["body"]
    # 기존 문서에는 페이로드 필드 하나만 병합
    assert body["doc"] == {"apis": "APIS RAW"}
    # 새 문서는 전체 문서(camelCase, null 제외)
    assert body["upsert"]["flightId"] == 9
    assert body["upsert"]["passengerId"] == 1
    assert body["upsert"]["lastName"] == "LEE"
    assert body["upsert"]["apis"] == "APIS RAW"
    assert "pnr" not in body["upsert"]


def test_upsert_pnr_merges_only_pnr(indexer: OpenSearchIndexer, mock_client: MagicMock):
    doc = FlightPassengerDocument(flight_id=9, passenger_id=1, pnr="PNR RAW")

    indexer.upsert("9-1", doc, PayloadKind.pnr)

    body = mock_client.update.call_args.kwargs["body"]
    assert body["doc"] == {"pnr": "PNR RAW"}
    assert "apis" not in body["upsert"]


@pytest.mark.parametrize("error", [
    ConnectionError("N/A", "connection refused", None),
    ConflictError(409, "version_conflict_engine_exception", {}),
])
def test_upsert_failure_raises_indexing_failed(indexer: OpenSearchIndexer, mock_client: MagicMock, document, error):
    mock_client.update.side_effect = error

    with pytest.raises(IndexingFailed) as ei:
        indexer.upsert("9-1", document, PayloadKind.apis)

    assert ei.value.doc_id == "9-1"


# ----------------------
# get
# ----------------------
def test_get_returns_source(indexer: OpenSearchIndexer, mock_client: MagicMock):
    mock_client.get.return_value = {"_id": "9-1", "found": True, "_source": {"flightId": 9}}

    assert indexer.get("9-1") == {"flightId": 9}
    mock_client.get.assert_called_once_with(index="gtas", id="9-1")


def test_get_missing_returns_none(indexer: OpenSearchIndexer, mock_client: MagicMock):
    mock_client.get.side_effect = NotFoundError(404, "not_found", {"found": False})

    assert indexer.get("9-1") is None
