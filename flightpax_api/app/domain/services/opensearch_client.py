"""
OpenSearch 클라이언트 수명주기.

- 앱 시작 시 init_client()로 한 번 생성해 공유하고, 종료 시 close_client()로 정리한다.
- 호스트/포트 설정이 없으면 연동을 비활성화한다(에러 아님).
- 연결 확인(ping)에 실패하면 클라이언트를 닫고 비활성 상태로 둔다.
"""

import logging
from opensearchpy import OpenSearch
from flightpax_api.app.platform.config import Settings, settings

logger = logging.getLogger(__name__)

_client: OpenSearch | None = None


def init_client(conf: Settings = settings) -> OpenSearch | None:
    global _client
    if is_up():
        return _client

    if not conf.opensearch_configured:
        logger.info("OpenSearch configuration not found")
        return None

    logger.info("OpenSearch client init: %s:%s", conf.OPENSEARCH_HOSTNAME, conf.OPENSEARCH_PORT)
    _client = OpenSearch(
        hosts=[{
            "host": conf.OPENSEARCH_HOSTNAME,
            "port": conf.OPENSEARCH_PORT,
            "scheme": conf.OPENSEARCH_SCHEME,
        }],
        verify_certs=False,
    )
    # ping은 호스트 해석/연결 실패 시 예외 대신 False를 반환한다
    if not _client.ping():
        logger.warning("Init failed: OpenSearch not available")
        close_client()
        return None
    return _client


def get_client() -> OpenSearch | None:
    return _client


def is_up() -> bool:
    return _client is not None


def close_client() -> None:
    global _client
    if _client is None:
        return
    logger.info("Closing OpenSearch client")
    try:
        _client.close()
    finally:
        _client = None
