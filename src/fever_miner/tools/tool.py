"""도구 시스템 기본 인터페이스

Tool 추상 클래스를 정의합니다. 외부 프로세스 호출은 모두 이 인터페이스 뒤에 있어
테스트에서 실제 프로세스 없이 대체할 수 있습니다.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict

from .tool_result import ToolResult


class Tool(ABC):
    """모든 도구의 기본 인터페이스"""
    
    @property
    @abstractmethod
    def name(self) -> str:
        """도구 이름"""
        pass
    
    @property 
    @abstractmethod
    def description(self) -> str:
        """도구 설명"""
        pass
    
    @abstractmethod
    def validate_parameters(self, params: Dict[str, Any]) -> bool:
        """매개변수 유효성 검증
        
        Args:
            params: 검증할 매개변수 딕셔너리
            
        Returns:
            bool: 유효성 검증 결과
        """
        pass
    
    @abstractmethod
    def execute(self, **kwargs) -> ToolResult:
        """도구 실행
        
        Args:
            **kwargs: 도구 실행에 필요한 파라미터
            
        Returns:
            ToolResult: 도구 실행 결과
        """
        pass
