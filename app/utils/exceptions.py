# app/utils/exceptions.py
"""
서비스 공통 예외

- InputValidationError: 필수 입력 누락/형식 오류 (400)
- UpstreamError: 생성형 AI / OCR 외부 호출 실패 (원본 상태코드 유지)
- StoreError: 데이터베이스 처리 실패 (500)
"""

from typing import Any, List, Optional


class FortuneServiceError(Exception):
    """서비스 예외 기본 클래스"""
    def __init__(self, message: str, code: int = 500):
        self.message = message
        self.code = code
        super().__init__(message)


class InputValidationError(FortuneServiceError):
    """필수 필드 누락 또는 입력 형식 오류"""
    def __init__(self, message: str, missing_fields: Optional[List[str]] = None):
        self.missing_fields = missing_fields or []
        super().__init__(message, code=400)


class UpstreamError(FortuneServiceError):
    """외부 서비스 호출 실패"""
    def __init__(self, message: str, status: Optional[int] = None, body: Any = None):
        self.status = status
        self.body = body
        super().__init__(message, code=status or 502)


class StoreError(FortuneServiceError):
    """데이터베이스 오류"""
    def __init__(self, message: str):
        super().__init__(message, code=500)
