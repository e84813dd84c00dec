"""가변성(feature) 모델

dumpconf 중간 표현에서 파싱한 Kconfig feature와 그 제약을 담습니다.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass
class Feature:
    """단일 Kconfig 심볼"""
    name: str
    type: str = "unknown"
    has_prompt: bool = False
    depends: Optional[str] = None
    defaults: List[Tuple[str, str]] = field(default_factory=list)   # (값, 조건)
    selects: List[Tuple[str, str]] = field(default_factory=list)    # (대상, 조건)
    choice: Optional[str] = None
    definition: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'type': self.type,
            'has_prompt': self.has_prompt,
            'depends': self.depends,
            'defaults': [list(d) for d in self.defaults],
            'selects': [list(s) for s in self.selects],
            'choice': self.choice,
            'definition': self.definition
        }


@dataclass
class Choice:
    """Kconfig choice 그룹"""
    name: str
    required: bool
    type: str
    members: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'required': self.required,
            'type': self.type,
            'members': list(self.members)
        }


@dataclass
class VariabilityModel:
    """파일 하나에서 추출한 가변성 모델"""
    features: Dict[str, Feature] = field(default_factory=dict)
    choices: Dict[str, Choice] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> 'VariabilityModel':
        """아티팩트가 없는 쪽에 사용하는 빈 모델"""
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.features and not self.choices

    @property
    def feature_names(self) -> List[str]:
        return sorted(self.features)

    def get_or_create(self, name: str) -> Feature:
        if name not in self.features:
            self.features[name] = Feature(name=name)
        return self.features[name]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'features': [self.features[name].to_dict() for name in self.feature_names],
            'choices': [choice.to_dict() for choice in self.choices.values()]
        }
