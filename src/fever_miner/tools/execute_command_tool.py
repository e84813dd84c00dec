"""외부 명령어 실행 도구

ExecuteCommandTool 클래스 정의입니다.
허용 목록 기반으로 git 및 분석 도구 바이너리만 실행합니다.
"""

import subprocess
import os
from typing import Any, Dict, Iterable, List, Optional

from .tool import Tool
from .tool_result import ToolResult


# git은 읽기 전용 하위 명령만 허용
ALLOWED_GIT_COMMANDS = {'rev-parse', 'rev-list', 'diff-tree', 'cat-file', 'log', 'show'}


class ExecuteCommandTool(Tool):
    """허용된 외부 명령어 실행 도구"""
    
    def __init__(self, allowed_commands: Optional[Iterable[str]] = None):
        """
        Args:
            allowed_commands: 실행을 허용할 명령어 이름 (경로 제외)
        """
        self.allowed_commands = {'git'}
        if allowed_commands:
            self.allowed_commands.update(
                os.path.basename(command) for command in allowed_commands
            )
    
    @property
    def name(self) -> str:
        return "execute_command"
    
    @property
    def description(self) -> str:
        return "허용된 외부 명령어를 실행합니다. git은 읽기 전용 작업만 허용"
    
    def validate_parameters(self, params: Dict[str, Any]) -> bool:
        """파라미터 유효성 검증
        
        Args:
            params: 검증할 파라미터 딕셔너리
            
        Returns:
            bool: 유효성 검증 결과
        """
        command = params.get('command')
        if not isinstance(command, list) or not command:
            return False
        if not all(isinstance(token, str) for token in command):
            return False
            
        if params.get('cwd') is not None and not isinstance(params['cwd'], str):
            return False
            
        timeout = params.get('timeout')
        if timeout is not None and not isinstance(timeout, (int, float)):
            return False

        if params.get('env') is not None and not isinstance(params['env'], dict):
            return False

        if params.get('stdout_path') is not None and not isinstance(params['stdout_path'], str):
            return False
            
        return True
    
    def execute(self, command: List[str], cwd: Optional[str] = None,
                timeout: Optional[float] = None, env: Optional[Dict[str, str]] = None,
                stdout_path: Optional[str] = None) -> ToolResult:
        """명령어를 실행합니다
        
        Args:
            command: 실행할 명령어 (argv 리스트)
            cwd: 명령어 실행 디렉토리 (선택사항)
            timeout: 타임아웃 (초, None이면 종료까지 대기)
            env: 기존 환경변수에 덮어쓸 값
            stdout_path: 지정하면 표준 출력을 이 파일에 바이트 그대로 기록
            
        Returns:
            ToolResult: 명령어 실행 결과
        """
        if not self._validate_command_safety(command):
            return ToolResult(
                success=False,
                data=None,
                error_message=f"Command blocked by safety filters: {' '.join(command)}"
            )

        process_env = None
        if env:
            process_env = dict(os.environ)
            process_env.update(env)

        try:
            if stdout_path:
                with open(stdout_path, 'wb') as out:
                    result = subprocess.run(
                        command,
                        cwd=cwd,
                        env=process_env,
                        stdout=out,
                        stderr=subprocess.PIPE,
                        timeout=timeout
                    )
                stdout = ""
                stderr = result.stderr.decode('utf-8', errors='replace') if result.stderr else ""
            else:
                result = subprocess.run(
                    command,
                    cwd=cwd,
                    env=process_env,
                    capture_output=True,
                    encoding='utf-8',
                    errors='replace',
                    timeout=timeout
                )
                stdout = result.stdout if result.stdout else ""
                stderr = result.stderr if result.stderr else ""
            returncode = result.returncode
        except subprocess.TimeoutExpired:
            return ToolResult(
                success=False,
                data=None,
                error_message=f"Command timed out after {timeout} seconds",
            )
        except OSError as e:
            return ToolResult(
                success=False,
                data=None,
                error_message=f"Failed to execute command: {str(e)}",
            )

        return ToolResult(
            success=returncode == 0,
            data={
                "returncode": returncode,
                "stdout": stdout,
                "stderr": stderr,
                "command": command,
                "stdout_path": stdout_path
            },
            error_message=stderr if returncode != 0 and stderr else None,
        )
    
    def _validate_command_safety(self, command: List[str]) -> bool:
        """허용 목록 검증"""
        if not command:
            return False

        base_command = os.path.basename(command[0])
        if base_command not in self.allowed_commands:
            return False

        if base_command == 'git':
            return self._git_subcommand(command) in ALLOWED_GIT_COMMANDS

        return True

    def _git_subcommand(self, command: List[str]) -> Optional[str]:
        """git 전역 옵션(-C, -c 등)을 건너뛰고 하위 명령 추출"""
        tokens = iter(command[1:])
        for token in tokens:
            if token in ('-C', '-c'):
                next(tokens, None)
                continue
            if token.startswith('-'):
                continue
            return token
        return None
