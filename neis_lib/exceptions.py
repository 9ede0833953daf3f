"""
Errors raised by the NEIS meal client.
"""

UNKNOWN_ERROR = '알 수 없는 에러'


class NeisError(Exception):
    """Base class for every failure reported by neis_lib."""


class AllProxiesExhausted(NeisError):
    """Every proxy candidate failed; carries the last failure detail."""

    def __init__(self, last_error=None):
        self.last_error = last_error or UNKNOWN_ERROR
        super().__init__(f"모든 프록시 서버 실패. 마지막 에러: {self.last_error}")


class MalformedPayload(NeisError):
    """The response body is not well-formed XML."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"XML 파싱 실패: {detail}")
