from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from opensearchpy.exceptions import OpenSearchException

from flightpax_api.app.api.routers import (
    health,
    search,
    index
)
from flightpax_api.app.adapters.indexers.opensearch_indexer import OpenSearchIndexer
from flightpax_api.app.domain.services import opensearch_client
from flightpax_api.app.platform.config import settings
from flightpax_api.app.platform.logging import setup_logging
from flightpax_api.app.platform.errors import (
    http_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
    domain_exception_handler
)
from flightpax_api.app.platform import exceptions as domainex
from flightpax_api.app.middlewares.request_context import RequestContextMiddleware

logger = logging.getLogger(__name__)


def init_search_engine() -> None:
    """
    OpenSearch 클라이언트를 한 번만 생성해서 공유하고, 인덱스가 없으면 생성한다.
    설정이 없거나 연결/인덱스 생성에 실패하면 검색 연동은 비활성 상태로 둔다.
    """
    client = opensearch_client.init_client(settings)
    if client is None:
        return
    try:
        OpenSearchIndexer(client, settings.OPENSEARCH_INDEX).ensure_index()
    except OpenSearchException:
        logger.exception("Init failed: cannot prepare index %s", settings.OPENSEARCH_INDEX)
        opensearch_client.close_client()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(
        log_to_file=settings.LOG_TO_FILE,
        log_dir=settings.LOG_DIR,
        as_json=settings.LOG_AS_JSON,
        level=settings.LOG_LEVEL)
    init_search_engine()
    try:
        yield
    finally:
        opensearch_client.close_client()

app = FastAPI(title="Flight Passenger Search API", lifespan=lifespan)
app.include_router(health.router)
app.include_router(index.router, prefix="/api")
app.include_router(search.router, prefix="/api")

# Global Exception Filter
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(domainex.DomainError, domain_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# 요청 컨텍스트/액세스 로그 미들웨어
app.add_middleware(RequestContextMiddleware)
