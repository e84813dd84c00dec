"""Kbuild/Makefile 파서

`obj-$(CONFIG_X) += foo.o` 형태의 매핑과 ifdef/ifeq 조건 블록을 BuildModel로 변환합니다.
"""

import logging
import re
from pathlib import Path
from typing import List, Optional

from fever_miner.models.build_model import BuildModel, MappingEntry, TargetType

logger = logging.getLogger(__name__)

ASSIGNMENT = re.compile(
    r'^\s*(?P<owner>[A-Za-z0-9_./-]+?)-(?P<selector>y|m|objs|\$\((?P<symbol>CONFIG_[A-Za-z0-9_]+)\))'
    r'\s*(?:\+=|:=|\?=|=)\s*(?P<values>.*)$'
)
CONFIG_REFERENCE = re.compile(r'\$\(?(CONFIG_[A-Za-z0-9_]+)\)?')
CONDITIONAL = re.compile(r'^\s*(?P<directive>ifdef|ifndef|ifeq|ifneq)\s+(?P<argument>.*)$')

# 매핑이 아닌 kbuild 변수
NON_MAPPING_OWNERS = {
    'always', 'targets', 'extra', 'hostprogs', 'clean-files', 'clean-dirs',
    'subdir', 'no-clean-files', 'header-test', 'userprogs'
}
DIRECT_OWNERS = {'obj', 'lib', 'core', 'drivers', 'libs', 'net', 'init'}


def join_continuations(text: str) -> List[str]:
    """백슬래시로 이어진 줄 합치기"""
    lines: List[str] = []
    buffer = ""
    for raw in text.splitlines():
        if raw.endswith('\\'):
            buffer += raw[:-1] + ' '
            continue
        lines.append(buffer + raw)
        buffer = ""
    if buffer:
        lines.append(buffer)
    return lines


def _strip_comment(line: str) -> str:
    index = line.find('#')
    return line if index < 0 else line[:index]


def _negate(guard: str) -> str:
    return guard[1:] if guard.startswith('!') else '!' + guard


def parse_condition(directive: str, argument: str) -> str:
    """조건 지시문을 가드 문자열로 변환 (부정은 '!' 접두사)"""
    argument = argument.strip()
    if directive in ('ifdef', 'ifndef'):
        guard = argument
        return guard if directive == 'ifdef' else _negate(guard)

    symbol_match = CONFIG_REFERENCE.search(argument)
    inner = argument.strip('()')
    parts = [part.strip().strip('"\'') for part in inner.split(',', 1)]
    rhs = parts[1] if len(parts) > 1 else ''

    if symbol_match is None:
        guard = '='.join(parts)
        return guard if directive == 'ifeq' else _negate(guard)

    symbol = symbol_match.group(1)
    enabled = rhs in ('y', 'm')
    if directive == 'ifeq':
        return symbol if enabled else _negate(symbol)
    # ifneq: 비어 있지 않거나 n이 아니면 활성화
    return _negate(symbol) if enabled else symbol


class BuildScriptParser:
    """빌드 스크립트 → BuildModel"""

    def parse_file(self, path, artifact_path: str = "") -> BuildModel:
        text = Path(path).read_text(encoding='utf-8', errors='replace')
        return self.parse(text, artifact_path)

    def parse(self, text: str, artifact_path: str = "") -> BuildModel:
        entries: List[MappingEntry] = []
        guards: List[str] = []
        composites = set()

        for line in join_continuations(text):
            line = _strip_comment(line).rstrip()
            if not line.strip():
                continue

            stripped = line.strip()
            if stripped == 'endif':
                if guards:
                    guards.pop()
                continue
            if stripped.startswith('else'):
                self._handle_else(stripped, guards)
                continue

            conditional = CONDITIONAL.match(line)
            if conditional:
                guards.append(parse_condition(conditional.group('directive'), conditional.group('argument')))
                continue

            assignment = ASSIGNMENT.match(line)
            if not assignment:
                continue

            owner = assignment.group('owner')
            if owner in NON_MAPPING_OWNERS or owner.endswith('flags'):
                continue

            condition = assignment.group('symbol')
            composite: Optional[str] = None
            if owner not in DIRECT_OWNERS:
                composite = owner
                composites.add(owner)

            for token in assignment.group('values').split():
                if token.startswith('-'):
                    continue
                entries.append(MappingEntry(
                    target=token,
                    target_type=self._target_type(token),
                    condition=condition,
                    composite=composite,
                    guards=tuple(guards),
                ))

        entries = [self._mark_composite(entry, composites) for entry in entries]
        logger.debug(f"빌드 스크립트 파싱 완료: {artifact_path or '<memory>'} ({len(entries)}개 매핑)")
        return BuildModel(file_path=artifact_path, entries=entries)

    def _handle_else(self, stripped: str, guards: List[str]) -> None:
        if not guards:
            return
        rest = stripped[len('else'):].strip()
        conditional = CONDITIONAL.match(rest) if rest else None
        if conditional:
            guards[-1] = parse_condition(conditional.group('directive'), conditional.group('argument'))
        else:
            guards[-1] = _negate(guards[-1])

    def _target_type(self, token: str) -> TargetType:
        if token.endswith('/'):
            return TargetType.FOLDER
        if token.endswith('.o'):
            return TargetType.COMPILATION_UNIT
        return TargetType.OTHER

    def _mark_composite(self, entry: MappingEntry, composites) -> MappingEntry:
        if entry.composite is None and entry.target.endswith('.o') and entry.target[:-2] in composites:
            return MappingEntry(entry.target, TargetType.COMPOSITE, entry.condition,
                                entry.composite, entry.guards)
        return entry
