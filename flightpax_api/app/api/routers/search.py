from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from flightpax_api.app.api.deps import get_search_service, SearchService
from flightpax_api.app.domain.models import ApiResponse, Passenger
import logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])

class PagingRequest(BaseModel):
    page: int = Field(1, ge=1, description="페이지 번호(1부터)")
    page_size: int = Field(10, gt=0, description="페이지 크기")
    sort_field: str = Field("_score", description="정렬 필드(예: lastName)")
    sort_direction: str = Field("desc", description="'asc'(대소문자 무관)면 오름차순, 그 외 내림차순")
    explain: bool = Field(False, description="검색 결과 설명 포함 여부")

class SearchRequest(PagingRequest):
    query: str = Field(..., description="검색 쿼리")

class LinkSearchRequest(PagingRequest):
    passenger: Passenger = Field(..., description="연관 탑승객을 찾을 기준 탑승객")

@router.post(
    "",
    summary="탑승객 자유 텍스트 검색",
    description=(
        "원문(APIS/PNR), 이름, 항공편, 출발/도착지, 주소, 여행 문서를 대상으로 검색합니다. "
        "`page`/`page_size`로 페이지를, `sort_field`/`sort_direction`으로 정렬을 지정합니다."
    ),
    operation_id="searchPassengers",
    status_code=200,
    response_model=ApiResponse,
    responses={
        200: {
            "description": "검색 성공",
            "content": {
                "application/json": {
                    "examples": {
                        "basic": {
                            "summary": "기본 검색 예시",
                            "value": {
                                "success": True,
                                "message": "검색 성공",
                                "data": {
                                    "total_hits": 1,
                                    "results": [
                                        {
                                            "passenger_id": 1,
                                            "flight_id": 9,
                                            "first_name": "ANN",
                                            "last_name": "LEE",
                                            "flight_number": "KE017",
                                            "origin": "ICN",
                                            "destination": "LAX",
                                            "addresses": [],
                                            "documents": [],
                                            "apis": "UNA:+.? 'UNB+UNOA:4+...",
                                            "pnr": None
                                        }
                                    ]
                                }
                            }
                        }
                    }
                }
            },
        },
        400: {"description": "잘못된 요청 값"},
        502: {"description": "검색 결과 변환 실패"},
        503: {"description": "검색 엔진 비활성"},
    },
)
def search(req: SearchRequest, svc: SearchService = Depends(get_search_service)):
    logger.info(f"SearchRequest: {req}")
    result = svc.search_passengers(
        query=req.query,
        page=req.page,
        page_size=req.page_size,
        sort_field=req.sort_field,
        sort_direction=req.sort_direction,
        explain=req.explain)
    return ApiResponse(success=True, message="검색 성공", data=result.model_dump(mode="json"))

@router.post(
    "/links",
    summary="연관 탑승객 검색",
    description=(
        "기준 탑승객과 이름이 같거나, 여행 문서 번호/성이 다른 탑승객의 문서나 PNR 원문에 "
        "나타나는 탑승객을 찾습니다. 매칭된 필드의 하이라이트를 함께 반환합니다."
    ),
    operation_id="findPassengerLinks",
    status_code=200,
    response_model=ApiResponse,
    responses={
        400: {"description": "잘못된 요청 값"},
        503: {"description": "검색 엔진 비활성"},
    },
)
def links(req: LinkSearchRequest, svc: SearchService = Depends(get_search_service)):
    logger.info(f"LinkSearchRequest: passenger={req.passenger.id}")
    result = svc.find_passenger_links(
        passenger=req.passenger,
        page=req.page,
        page_size=req.page_size,
        sort_field=req.sort_field,
        sort_direction=req.sort_direction,
        explain=req.explain)
    return ApiResponse(success=True, message="연관 탑승객 검색 성공", data=result.model_dump(mode="json"))
