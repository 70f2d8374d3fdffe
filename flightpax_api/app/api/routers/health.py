from fastapi import APIRouter
from flightpax_api.app.domain.services import opensearch_client

router = APIRouter(prefix="/health", tags=["health"])

@router.get("")
def health():
    # 검색 엔진이 비활성이어도 앱 자체는 정상
    return {"ok": True, "search_available": opensearch_client.is_up()}
