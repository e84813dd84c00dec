"""하위 featurization 단계와의 경계

추출된 EvolutionStep 목록을 feature 중심 변경 기록으로 바꾸는 단계입니다.
"""

from abc import ABC, abstractmethod
from typing import Any, List

from fever_miner.change.evolution_step import EvolutionStep


class Featurizer(ABC):
    """EvolutionStep 목록 소비자"""

    @abstractmethod
    def featurize(self, steps: List[EvolutionStep]) -> Any:
        """추출 단계들을 feature 변경 기록으로 변환"""
        pass


class PassthroughFeaturizer(Featurizer):
    """단계 목록을 그대로 돌려주는 기본 구현"""

    def featurize(self, steps: List[EvolutionStep]) -> List[EvolutionStep]:
        return list(steps)
