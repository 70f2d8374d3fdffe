from __future__ import annotations

from fastapi import Depends
from opensearchpy import OpenSearch

from flightpax_api.app.domain.ports import IndexPort, ParsePort, SearchPort, TransformPort
from flightpax_api.app.domain.services import opensearch_client
from flightpax_api.app.domain.services.search_service import SearchService
from flightpax_api.app.domain.services.index_service import IndexService
from flightpax_api.app.adapters.transformers.flightpax_transformer import FlightPaxTransformer
from flightpax_api.app.adapters.indexers.opensearch_indexer import OpenSearchIndexer
from flightpax_api.app.adapters.searchers.opensearch_searcher import OpenSearchSearcher
from flightpax_api.app.adapters.parsers.hit_parser import HitParser
from flightpax_api.app.platform.config import settings
from flightpax_api.app.platform.exceptions import SearchUnavailable


# ---- 클라이언트 ----
def get_opensearch() -> OpenSearch:
    """
    앱 시작 시 lifespan에서 만들어 둔 OpenSearch 클라이언트를 꺼낸다.
    설정이 없거나 연결에 실패해 비활성 상태면 SearchUnavailable(503).
    """
    client = opensearch_client.get_client()
    if client is None:
        raise SearchUnavailable()
    return client


def get_index_service(os: OpenSearch = Depends(get_opensearch)) -> IndexService:
    """
    FastAPI DI에서 OpenSearch 클라이언트를 받아 IndexService를 생성해 주입한다.
    """
    transformer: TransformPort = FlightPaxTransformer()
    indexer: IndexPort = OpenSearchIndexer(
        os,
        settings.OPENSEARCH_INDEX,
        retry_on_conflict=settings.OPENSEARCH_RETRY_ON_CONFLICT)
    return IndexService(transformer=transformer, indexer=indexer)


def get_search_service(os: OpenSearch = Depends(get_opensearch)) -> SearchService:
    """
    FastAPI DI에서 OpenSearch 클라이언트를 받아 SearchService를 생성해 주입한다.
    """
    searcher: SearchPort = OpenSearchSearcher(os, settings.OPENSEARCH_INDEX)
    parser: ParsePort = HitParser()
    return SearchService(searcher, parser)
