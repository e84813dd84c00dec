"""diff 한쪽의 모델 존재 여부

아티팩트가 diff의 한쪽에 존재하지 않을 때 null 대신 Absent를 사용해
빈 모델인 경우가 모든 호출 지점에서 드러나도록 합니다.
"""

from dataclasses import dataclass
from typing import Any, Dict, Generic, TypeVar, Union

M = TypeVar('M')


@dataclass(frozen=True)
class Present(Generic[M]):
    """해당 쪽에 아티팩트가 존재하고 모델이 만들어진 경우"""
    model: M

    @property
    def is_present(self) -> bool:
        return True

    def model_or(self, empty: M) -> M:
        return self.model


@dataclass(frozen=True)
class Absent:
    """해당 쪽에 아티팩트가 없는 경우 (추가/삭제)"""

    @property
    def is_present(self) -> bool:
        return False

    def model_or(self, empty: M) -> M:
        return empty


ModelSide = Union[Present[M], Absent]


def side_to_dict(side: 'ModelSide') -> Dict[str, Any]:
    """모델 쪽을 JSON 딕셔너리로 변환 (모델은 to_dict 구현 필요)"""
    if isinstance(side, Present):
        return {'present': True, 'model': side.model.to_dict()}
    return {'present': False, 'model': None}
