"""dumpconf 중간 표현(RSF) 파서

탭으로 구분된 레코드를 VariabilityModel로 변환합니다.

    Item        FOO     boolean
    HasPrompts  FOO     1
    Default     FOO     "y"     "BAR"
    Depends     FOO     "BAR && BAZ"
    ItemSelects FOO     "QUX"   "y"
    Choice      CHOICE_0        required        boolean
    ChoiceItem  FOO     CHOICE_0
    Definition  FOO     "drivers/Kconfig:12"
"""

import logging
import shlex
from pathlib import Path
from typing import List

from fever_miner.models.variability_model import Choice, VariabilityModel

logger = logging.getLogger(__name__)


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value


def split_record(line: str) -> List[str]:
    """레코드 한 줄을 필드 목록으로 분리"""
    if '\t' in line:
        return [_unquote(field) for field in line.split('\t') if field.strip()]
    try:
        return shlex.split(line)
    except ValueError:
        return line.split()


class FeatureModelParser:
    """RSF 레코드 → VariabilityModel"""

    def parse_file(self, path) -> VariabilityModel:
        text = Path(path).read_text(encoding='utf-8', errors='replace')
        return self.parse(text)

    def parse(self, text: str) -> VariabilityModel:
        model = VariabilityModel()
        for line_number, line in enumerate(text.splitlines(), start=1):
            if not line.strip() or line.lstrip().startswith('#'):
                continue
            fields = split_record(line)
            if len(fields) < 2:
                logger.debug(f"Skipping malformed record at line {line_number}: {line!r}")
                continue
            self._apply(model, fields)
        return model

    def _apply(self, model: VariabilityModel, fields: List[str]) -> None:
        kind, name, args = fields[0], fields[1], fields[2:]

        if kind == 'Item':
            model.get_or_create(name).type = args[0] if args else "unknown"
        elif kind == 'HasPrompts':
            model.get_or_create(name).has_prompt = bool(args) and args[0] not in ('0', '')
        elif kind == 'Default':
            value = args[0] if args else ""
            condition = args[1] if len(args) > 1 else "y"
            model.get_or_create(name).defaults.append((value, condition))
        elif kind == 'Depends':
            model.get_or_create(name).depends = args[0] if args else None
        elif kind == 'ItemSelects':
            target = args[0] if args else ""
            condition = args[1] if len(args) > 1 else "y"
            model.get_or_create(name).selects.append((target, condition))
        elif kind == 'Choice':
            required = bool(args) and args[0] == 'required'
            choice_type = args[1] if len(args) > 1 else "boolean"
            model.choices[name] = Choice(name=name, required=required, type=choice_type)
        elif kind == 'ChoiceItem':
            choice_name = args[0] if args else None
            model.get_or_create(name).choice = choice_name
            if choice_name:
                if choice_name not in model.choices:
                    model.choices[choice_name] = Choice(name=choice_name, required=False, type="boolean")
                model.choices[choice_name].members.append(name)
        elif kind == 'Definition':
            model.get_or_create(name).definition = args[0] if args else None
        else:
            logger.debug(f"Ignoring unknown record kind: {kind}")
