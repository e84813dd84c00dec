"""외부 도구 호출 실행기

도구 이름과 파라미터를 받아 파라미터 검증 후 실제 도구를 호출합니다.
도메인 빌더는 이 실행기만 알기 때문에 테스트에서 가짜 실행기로 대체할 수 있습니다.
"""

import time
from typing import Any, Dict, Optional

from fever_miner.config.settings import FeverConfig
from .tool import Tool
from .tool_result import ToolResult
from .execute_command_tool import ExecuteCommandTool
from .feature_location_tool import FeatureLocationScannerTool
from .config_dumper_tool import ConfigModelDumperTool


class ToolExecutor:
    """도구 실행기 - 이름으로 도구를 찾아 실행"""

    def __init__(self, config: Optional[FeverConfig] = None):
        self.config = config or FeverConfig()
        self.generator = ToolGenerator(self.config)
    
    def execute_tool_call(self, tool_name: str, parameters: Dict[str, Any]) -> ToolResult:
        """도구 호출을 실행합니다
        
        Args:
            tool_name: 실행할 도구 이름
            parameters: 도구 실행에 필요한 파라미터
            
        Returns:
            ToolResult: 도구 실행 결과 (예외도 실패 결과로 변환됨)
        """
        start_time = time.time()
        try:
            tool = self.generator.generate_tool(tool_name)
            
            # 파라미터 검증
            if not tool.validate_parameters(parameters):
                return ToolResult(
                    success=False,
                    data=None,
                    error_message=f"Invalid parameters for tool '{tool_name}': {parameters}",
                )
            
            result = tool.execute(**parameters)
            result.execution_time = time.time() - start_time
            return result
        
        except Exception as e:
            return ToolResult(
                success=False,
                data=None,
                error_message=f"Tool execution failed: {str(e)}",
                execution_time=time.time() - start_time
            )


class ToolGenerator:
    """설정으로부터 도구 인스턴스 생성"""

    def __init__(self, config: FeverConfig):
        self.config = config

    def generate_tool(self, tool_name: str) -> Tool:
        """Generate a tool"""
        if tool_name == "execute_command":
            return ExecuteCommandTool(allowed_commands=[
                self.config.cppstats.executable,
                self.config.undertaker.dumpconf,
            ])
        elif tool_name == "scan_feature_locations":
            return FeatureLocationScannerTool(
                executable=self.config.cppstats.executable,
                path_env=self.config.cppstats.path_env,
                output_file_name=self.config.cppstats.output_file_name,
                timeout=self.config.cppstats.timeout_seconds,
            )
        elif tool_name == "dump_config_model":
            return ConfigModelDumperTool(
                executable=self.config.undertaker.dumpconf,
                timeout=self.config.undertaker.timeout_seconds,
            )
        else:
            raise ValueError(f"Unknown tool: {tool_name}")
