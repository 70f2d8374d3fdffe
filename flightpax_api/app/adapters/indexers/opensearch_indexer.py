"""
FlightPassengerDocument를 OpenSearch에 색인하는 IndexPort 구현체
"""

from __future__ import annotations
import json
import logging
import os
from typing import Any, Dict
from pathlib import Path
from opensearchpy import OpenSearch
from opensearchpy.exceptions import NotFoundError, OpenSearchException
from flightpax_api.app.domain.ports import IndexPort
from flightpax_api.app.domain.models import FlightPassengerDocument, PayloadKind
from flightpax_api.app.platform.exceptions import IndexingFailed

logger = logging.getLogger(__name__)


class OpenSearchIndexer(IndexPort):

    def __init__(self, client: OpenSearch, index_name: str, retry_on_conflict: int = 3) -> None:
        self.client = client
        self.index_name = index_name
        self.retry_on_conflict = retry_on_conflict
        self._load_index_schema()

    def _load_index_schema(self) -> None:
        """
            인덱스 스키마를 JSON 파일에서 로드한다.
        """
        root_dir = Path(os.path.dirname(__file__)).resolve().parents[2]
        schema_path = root_dir / "resources/schema/flightpax_index.json"
        with open(schema_path, 'r', encoding='utf-8') as f:
            self.index_schema = json.load(f)

    def ensure_index(self) -> str:
        """
            인덱스가 없으면 로드된 스키마로 생성한다. (여러 번 호출해도 안전)

            Returns:
                인덱스 이름
        """
        if self.client.indices.exists(index=self.index_name):
            logger.info("Index '%s' already exists.", self.index_name)
            return self.index_name

        self.client.indices.create(index=self.index_name, body=self.index_schema)
        logger.info("Index '%s' created.", self.index_name)
        return self.index_name

    def upsert(self, doc_id: str, document: FlightPassengerDocument, kind: PayloadKind) -> None:
        """
            문서 1건을 원자적으로 upsert 한다.

            - 문서가 없으면 document 전체를 생성(upsert 바디)
            - 문서가 있으면 kind에 해당하는 페이로드 필드(apis | pnr)만 병합(doc 바디)
              이름/항공편/문서/주소 등 나머지 필드는 최초 색인 값을 유지한다.
            - 같은 키에 대한 동시 쓰기 충돌은 엔진의 retry_on_conflict로 해소한다.

            Args:
                doc_id: 문서 ID ("{flightId}-{passengerId}")
                document: 색인 문서
                kind: 페이로드 종류
            Raises:
                IndexingFailed: 엔진 쓰기 실패
        """
        field = kind.value
        body = {
            "doc": {field: getattr(document, field)},
            "upsert": self.to_source(document),
        }
        try:
            self.client.update(
                index=self.index_name,
                id=doc_id,
                body=body,
                retry_on_conflict=self.retry_on_conflict,
            )
        except OpenSearchException as e:
            raise IndexingFailed(doc_id, str(e)) from e
        logger.debug("upserted %s", doc_id, extra={"doc_id": doc_id, "payload_kind": field})

    def get(self, doc_id: str) -> Dict[str, Any] | None:
        """
            문서 ID로 저장된 문서(_source)를 조회한다. 없으면 None.
        """
        try:
            response = self.client.get(index=self.index_name, id=doc_id)
        except NotFoundError:
            return None
        if not response.get("found", True):
            return None
        return response.get("_source")

    @staticmethod
    def to_source(document: FlightPassengerDocument) -> Dict[str, Any]:
        """색인 문서를 엔진에 저장할 camelCase JSON으로 변환한다(null 필드 제외)."""
        return document.model_dump(mode="json", by_alias=True, exclude_none=True)
