class DomainError(Exception):
    """도메인/유즈케이스 공통 베이스 예외"""
    pass

class ResourceNotFound(DomainError):
    def __init__(self, resource: str, detail: str | None = None):
        super().__init__(detail or f"{resource} not found")
        self.resource = resource

class InvalidInput(DomainError):
    def __init__(self, message: str):
        super().__init__(message)

class SearchUnavailable(DomainError):
    """검색 엔진 설정이 없거나 연결에 실패해 연동이 비활성화된 상태."""
    def __init__(self, detail: str | None = None):
        super().__init__(detail or "search engine is not available")

class IndexingFailed(DomainError):
    def __init__(self, doc_id: str, reason: str):
        super().__init__(f"Indexing failed for {doc_id}: {reason}")
        self.doc_id = doc_id
        self.reason = reason

class ResultParseFailed(DomainError):
    """검색 결과 변환 실패(날짜 포맷 오류 등). 페이지 전체를 실패시킨다."""
    def __init__(self, field: str, value: str, reason: str):
        super().__init__(f"Failed to parse {field}={value!r}: {reason}")
        self.field = field
        self.value = value
