"""도구 실행 결과

ToolResult 클래스 정의입니다.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional
import logging

from fever_miner.exceptions import ExternalToolError

logger = logging.getLogger(__name__)


@dataclass
class ToolResult:
    """도구 실행 결과"""
    success: bool
    data: Any
    error_message: Optional[str] = None
    execution_time: float = 0.0
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def returncode(self) -> Optional[int]:
        """프로세스 종료 코드 (프로세스가 실행되지 않았으면 None)"""
        if isinstance(self.data, dict):
            return self.data.get("returncode")
        return None

    def raise_for_status(self, tool_name: str, strict: bool = True) -> None:
        """실행 실패를 명시적인 에러로 변환
        
        Args:
            tool_name: 에러 메시지에 사용할 도구 이름
            strict: False이면 종료 코드 실패는 경고만 남김
            
        Raises:
            ExternalToolError: 실행 자체가 실패했거나 strict 모드에서 종료 코드가 0이 아닌 경우
        """
        if self.success:
            return

        stderr = ""
        if isinstance(self.data, dict):
            stderr = self.data.get("stderr") or ""

        # 프로세스가 시작조차 못했거나 타임아웃된 경우는 항상 치명적
        if self.returncode is None:
            raise ExternalToolError(
                f"{tool_name} execution failed: {self.error_message}",
                tool_name=tool_name,
                stderr=stderr,
            )

        if strict:
            raise ExternalToolError(
                f"{tool_name} exited with code {self.returncode}: {self.error_message}",
                tool_name=tool_name,
                returncode=self.returncode,
                stderr=stderr,
            )
        logger.warning(f"{tool_name} exited with code {self.returncode}, output will be trusted")
