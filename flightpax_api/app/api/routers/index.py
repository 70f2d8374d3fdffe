from fastapi import APIRouter, Depends
from flightpax_api.app.api.deps import get_index_service, IndexService
from flightpax_api.app.domain.models import ApiResponse, ManifestMessage, ReservationMessage
import logging
logger = logging.getLogger(__name__)


router = APIRouter(prefix="/index", tags=["index"])

_INDEX_RESPONSES = {
    200: {
        "description": "색인 성공(쌍 단위 실패는 errors에 포함)",
        "content": {
            "application/json": {
                "examples": {
                    "partial_failure": {
                        "summary": "일부 쌍 색인 실패 예",
                        "value": {
                            "success": True,
                            "message": "메시지 색인 완료",
                            "data": {
                                "indexed": 3,
                                "errors": [
                                    {"doc_id": "9-4", "reason": "ConnectionTimeout"}
                                ]
                            }
                        }
                    }
                }
            }
        },
    },
    422: {"description": "메시지 형식 오류"},
    503: {"description": "검색 엔진 비활성"},
}

@router.post(
    "/manifest",
    summary="APIS 매니페스트 메시지 색인",
    description=(
        "메시지의 탑승객 × 항공편 쌍마다 문서를 생성하거나, "
        "이미 있으면 `apis` 필드만 병합합니다."
    ),
    operation_id="indexManifestMessage",
    status_code=200,
    response_model=ApiResponse,
    responses=_INDEX_RESPONSES,
)
def index_manifest(message: ManifestMessage, svc: IndexService = Depends(get_index_service)):
    logger.info(f"ManifestMessage: flights={len(message.flights)} passengers={len(message.passengers)}")
    result = svc.index_manifest_message(message)
    return ApiResponse(success=True, message="메시지 색인 완료", data=result.model_dump())

@router.post(
    "/reservation",
    summary="PNR 예약 메시지 색인",
    description=(
        "메시지의 탑승객 × 항공편 쌍마다 문서를 생성(예약 주소 포함)하거나, "
        "이미 있으면 `pnr` 필드만 병합합니다."
    ),
    operation_id="indexReservationMessage",
    status_code=200,
    response_model=ApiResponse,
    responses=_INDEX_RESPONSES,
)
def index_reservation(message: ReservationMessage, svc: IndexService = Depends(get_index_service)):
    logger.info(f"ReservationMessage: flights={len(message.flights)} passengers={len(message.passengers)}")
    result = svc.index_reservation_message(message)
    return ApiResponse(success=True, message="메시지 색인 완료", data=result.model_dump())

@router.get(
    "/{flight_id}/{passenger_id}",
    summary="색인 문서 조회",
    operation_id="getFlightPassengerDocument",
    response_model=ApiResponse,
    responses={404: {"description": "문서 없음"}, 503: {"description": "검색 엔진 비활성"}},
)
def get_document(flight_id: int, passenger_id: int, svc: IndexService = Depends(get_index_service)):
    document = svc.get_document(flight_id, passenger_id)
    return ApiResponse(success=True, message="문서 조회 성공", data=document)
