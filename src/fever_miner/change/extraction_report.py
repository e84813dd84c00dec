from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List
import json

from .evolution_step import EvolutionStep


@dataclass
class FailedWindow:
    """추출에 실패한 커밋 윈도우"""
    commit_ids: List[str]
    error_type: str
    error_message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'commit_ids': list(self.commit_ids),
            'error_type': self.error_type,
            'error_message': self.error_message
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FailedWindow':
        return cls(
            commit_ids=list(data['commit_ids']),
            error_type=data['error_type'],
            error_message=data['error_message']
        )


@dataclass
class ExtractionReport:
    """배치 추출 결과
    
    실패한 윈도우는 기록만 하고 이전에 완료된 단계는 그대로 유지합니다.
    """
    steps: List[EvolutionStep] = field(default_factory=list)
    failures: List[FailedWindow] = field(default_factory=list)
    started_at: datetime = field(default_factory=datetime.now)
    processing_time_seconds: float = 0.0

    @property
    def total_steps(self) -> int:
        """성공한 추출 단계 수"""
        return len(self.steps)

    @property
    def total_failures(self) -> int:
        return len(self.failures)

    def to_dict(self) -> Dict[str, Any]:
        """JSON 직렬화를 위한 딕셔너리 변환"""
        return {
            'started_at': self.started_at.isoformat(),
            'processing_time_seconds': self.processing_time_seconds,
            'steps': [step.to_dict() for step in self.steps],
            'failures': [failure.to_dict() for failure in self.failures]
        }

    def save_to_json(self, filepath: str) -> None:
        """JSON 파일로 저장"""
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

    @classmethod
    def load_failures(cls, filepath: str) -> List[FailedWindow]:
        """저장된 보고서에서 실패한 윈도우 목록만 복원 (재실행용)"""
        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return [FailedWindow.from_dict(failure) for failure in data.get('failures', [])]
