"""feature location 스캐너 도구

cppstats를 featurelocations 모드로 실행합니다.
입력은 두 줄짜리 매니페스트(프로젝트 루트, 상대 소스 경로)이고,
출력은 프로젝트 루트 안의 고정 이름 CSV 파일입니다.
"""

import os
from typing import Any, Dict, Optional

from fever_miner.constants import FEATURE_LOCATIONS_FILE
from .tool import Tool
from .tool_result import ToolResult
from .execute_command_tool import ExecuteCommandTool


class FeatureLocationScannerTool(Tool):
    """cppstats featurelocations 실행 도구"""

    def __init__(self, executable: str = "cppstats", path_env: Optional[str] = None,
                 output_file_name: str = FEATURE_LOCATIONS_FILE,
                 timeout: Optional[float] = None):
        """
        Args:
            executable: cppstats 실행 파일 경로
            path_env: 실행 시 사용할 PATH (cppstats가 srcML 등을 찾는 경로)
            output_file_name: 프로젝트 루트에 생성되는 결과 파일 이름
            timeout: 타임아웃 (초, None이면 무제한)
        """
        self.executable = executable
        self.path_env = path_env
        self.output_file_name = output_file_name
        self.timeout = timeout
        self._command_tool = ExecuteCommandTool(allowed_commands=[executable])

    @property
    def name(self) -> str:
        return "scan_feature_locations"

    @property
    def description(self) -> str:
        return "매니페스트에 지정된 프로젝트의 전처리기 feature 위치를 스캔합니다"

    def validate_parameters(self, params: Dict[str, Any]) -> bool:
        """파라미터 유효성 검증"""
        for key in ('manifest_path', 'project_dir'):
            value = params.get(key)
            if not isinstance(value, str) or not value.strip():
                return False
        return True

    def execute(self, manifest_path: str, project_dir: str) -> ToolResult:
        """스캐너 실행
        
        Args:
            manifest_path: 매니페스트 파일 경로
            project_dir: 매니페스트 첫 줄의 프로젝트 루트
            
        Returns:
            ToolResult: data에 output_path가 포함된 실행 결과
        """
        command = [
            self.executable,
            "--kind", "featurelocations",
            "--list", os.path.abspath(manifest_path),
        ]
        env = {"PATH": self.path_env} if self.path_env else None

        result = self._command_tool.execute(command=command, timeout=self.timeout, env=env)
        output_path = os.path.join(project_dir, self.output_file_name)
        if isinstance(result.data, dict):
            result.data["output_path"] = output_path
        result.metadata["output_path"] = output_path
        return result
