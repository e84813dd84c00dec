"""설정 모델 덤퍼 도구

undertaker의 dumpconf로 Kconfig 조각을 중간 표현(RSF)으로 변환합니다.
표준 출력은 호출자가 지정한 파일로 기록됩니다.
"""

import os
from typing import Any, Dict, Optional

from .tool import Tool
from .tool_result import ToolResult
from .execute_command_tool import ExecuteCommandTool


class ConfigModelDumperTool(Tool):
    """dumpconf 실행 도구"""

    def __init__(self, executable: str = "dumpconf", timeout: Optional[float] = None):
        self.executable = executable
        self.timeout = timeout
        self._command_tool = ExecuteCommandTool(allowed_commands=[executable])

    @property
    def name(self) -> str:
        return "dump_config_model"

    @property
    def description(self) -> str:
        return "Kconfig 파일을 dumpconf 중간 표현으로 변환합니다"

    def validate_parameters(self, params: Dict[str, Any]) -> bool:
        """파라미터 유효성 검증"""
        for key in ('input_path', 'output_path'):
            value = params.get(key)
            if not isinstance(value, str) or not value.strip():
                return False
        return True

    def execute(self, input_path: str, output_path: str) -> ToolResult:
        """dumpconf 실행
        
        Args:
            input_path: 정제된 Kconfig 파일 경로
            output_path: 중간 표현을 기록할 파일 경로
            
        Returns:
            ToolResult: 실행 결과
        """
        result = self._command_tool.execute(
            command=[self.executable, os.path.abspath(input_path)],
            timeout=self.timeout,
            stdout_path=output_path,
        )
        result.metadata["output_path"] = output_path
        return result
