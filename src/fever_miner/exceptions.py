"""추출 파이프라인 예외 정의

치명적 오류는 진행 중인 추출 호출 전체를 중단시킵니다.
MissingObjectError만 도메인 빌더가 처리하는 비치명적 오류입니다.
"""

from typing import Optional


class ExtractionError(Exception):
    """추출 호출 중 발생하는 에러의 기본 클래스"""
    pass


class CommitResolutionError(ExtractionError):
    """커밋 식별자를 해석할 수 없는 경우"""
    pass


class WorkspaceError(ExtractionError):
    """임시 작업 공간 생성 실패"""
    pass


class MissingObjectError(ExtractionError):
    """저장소에서 blob 객체를 찾을 수 없는 경우 (추가/삭제 시 정상)"""
    pass


class ExternalToolError(ExtractionError):
    """외부 도구가 비정상 종료했거나 타임아웃된 경우"""

    def __init__(self, message: str, tool_name: str,
                 returncode: Optional[int] = None, stderr: str = ""):
        """
        Args:
            message: 에러 메시지
            tool_name: 실행한 도구 이름
            returncode: 프로세스 종료 코드 (타임아웃 등은 None)
            stderr: 표준 에러 출력
        """
        super().__init__(message)
        self.tool_name = tool_name
        self.returncode = returncode
        self.stderr = stderr


class MissingToolOutputError(ExtractionError):
    """외부 도구가 약속된 출력 파일을 만들지 않은 경우"""

    def __init__(self, message: str, expected_path: str):
        super().__init__(message)
        self.expected_path = expected_path


class InvalidToolOutputError(ExtractionError):
    """외부 도구의 출력 파일을 해석할 수 없는 경우 (헤더 누락, 손상된 CSV 등)"""

    def __init__(self, message: str, output_path: str = ""):
        super().__init__(message)
        self.output_path = output_path
