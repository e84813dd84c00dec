"""가변성 모델 진화 추출

Kconfig 파일 diff의 양쪽을 복원하고, 정제한 뒤 dumpconf로 변환하여
변경 전/후 VariabilityModel 쌍을 만듭니다.
"""

import logging
import re
from pathlib import Path
from typing import Optional

from fever_miner.change.artefact_diff import ArtefactDiff
from fever_miner.change.model_side import Absent, ModelSide, Present
from fever_miner.change.partial_evolution import PartialFeatureModelEvolution
from fever_miner.constants import UNSUPPORTED_MARKER
from fever_miner.exceptions import MissingObjectError, MissingToolOutputError
from fever_miner.models.variability_model import VariabilityModel
from fever_miner.parsers.paths import evolution_path
from fever_miner.parsers.workspace_stager import WorkspaceStager
from fever_miner.repository.repository_access import RepositoryAccess
from fever_miner.tools.tool_executor import ToolExecutor
from .feature_model_parser import FeatureModelParser

# dumpconf는 다른 파일을 include하는 지시문을 전체 트리 없이 해석하지 못함
SOURCE_DIRECTIVE = re.compile(r'^[ \t]*o?r?source\b.*$')
EQUALITY_OPERATOR = re.compile(r'={2,}')
DEPENDS_ON_MODULE = re.compile(r'depends on m\b')
HELP_KEYWORD = re.compile(r'^([ \t]*)(?:---help---|help)[ \t]*$')


def _indent_width(line: str) -> int:
    expanded = line.expandtabs(8)
    return len(expanded) - len(expanded.lstrip())


def _sanitize_line(line: str) -> str:
    line = SOURCE_DIRECTIVE.sub('', line)
    line = EQUALITY_OPERATOR.sub('=', line)
    return DEPENDS_ON_MODULE.sub('', line)


def _sanitize_once(text: str) -> str:
    """help 본문을 제외한 줄에 정제 규칙 적용

    help 본문은 키워드보다 깊게 들여쓴 줄들이며, 첫 본문 줄보다 얕은 줄에서 끝납니다.
    """
    result = []
    keyword_width: Optional[int] = None
    body_width: Optional[int] = None
    for line in text.split('\n'):
        if keyword_width is not None:
            if not line.strip():
                result.append(line)
                continue
            width = _indent_width(line)
            if body_width is None and width > keyword_width:
                body_width = width
            if body_width is not None and width >= body_width:
                result.append(line)
                continue
            keyword_width = body_width = None

        help_keyword = HELP_KEYWORD.match(line)
        if help_keyword:
            keyword_width = _indent_width(help_keyword.group(1))
            result.append(line)
            continue
        result.append(_sanitize_line(line))
    return '\n'.join(result)


def sanitize_kconfig(text: str) -> str:
    """dumpconf 호환을 위한 Kconfig 정제 (멱등)
    
    - source 계열 지시문 줄을 비움
    - `==` 비교를 `=` 로 정규화
    - `depends on m` 절 제거

    help 본문의 문장은 건드리지 않습니다.
    """
    while True:
        cleaned = _sanitize_once(text)
        if cleaned == text:
            return cleaned
        text = cleaned


def sanitize_kconfig_file(path: Path) -> None:
    """파일 내용을 제자리에서 정제"""
    content = path.read_text(encoding='utf-8', errors='replace')
    path.write_text(sanitize_kconfig(content), encoding='utf-8')


def strip_unsupported_lines(path: Path) -> int:
    """파일 앞부분에서 'not supported'로 끝나는 줄들을 제거
    
    Returns:
        제거한 줄 수
    """
    lines = path.read_text(encoding='utf-8', errors='replace').splitlines(keepends=True)
    counter = 0
    while counter < len(lines) and lines[counter].rstrip('\r\n').endswith(UNSUPPORTED_MARKER):
        counter += 1

    if counter:
        path.write_text(''.join(lines[counter:]), encoding='utf-8')
    return counter


class FeatureModelEvolutionBuilder:
    """Kconfig diff → PartialFeatureModelEvolution"""

    def __init__(self, repository: RepositoryAccess, stager: WorkspaceStager,
                 tool_executor: ToolExecutor, strict_exit_codes: bool = True,
                 parser: Optional[FeatureModelParser] = None):
        self.repository = repository
        self.stager = stager
        self.tool_executor = tool_executor
        self.strict_exit_codes = strict_exit_codes
        self.parser = parser or FeatureModelParser()
        self.logger = logging.getLogger(__name__)

    def build(self, diff: ArtefactDiff, sequence: int) -> PartialFeatureModelEvolution:
        """가변성 모델 변경 추출
        
        Args:
            diff: FeatureModel로 분류된 diff
            sequence: 단계 내 가변성 diff 순번 (임시 파일 이름용)
        """
        old_side = self._build_side(diff.old_blob_id, "old", sequence)
        new_side = self._build_side(diff.new_blob_id, "new", sequence)
        path = evolution_path(diff.old_path, diff.new_path)

        self.logger.debug(
            f"가변성 모델 추출: {path} (old={old_side.is_present}, new={new_side.is_present})"
        )
        return PartialFeatureModelEvolution(path=path, old=old_side, new=new_side)

    def _build_side(self, blob_id: Optional[str], side: str, sequence: int) -> ModelSide:
        if blob_id is None:
            return Absent()

        restored = self.stager.create_file(f"fm_{side}_{sequence}_", ".var")
        try:
            self.repository.restore_blob(blob_id, str(restored))
        except MissingObjectError as e:
            # 추가/삭제된 파일에서는 정상
            self.logger.debug(f"Kconfig blob 없음, 빈 모델 사용: {e}")
            return Absent()

        return Present(self.build_from_kconfig_file(restored, sequence))

    def build_from_kconfig_file(self, kconfig_file: Path, sequence: int) -> VariabilityModel:
        """복원된 Kconfig 파일에서 VariabilityModel 생성"""
        sanitize_kconfig_file(kconfig_file)

        intermediate = self.stager.create_file(f"fm_{sequence}_", ".fm")
        result = self.tool_executor.execute_tool_call(
            "dump_config_model",
            {"input_path": str(kconfig_file), "output_path": str(intermediate)}
        )
        result.raise_for_status("dumpconf", strict=self.strict_exit_codes)

        if not intermediate.is_file():
            raise MissingToolOutputError(
                f"dumpconf output not found: {intermediate}", expected_path=str(intermediate)
            )

        dropped = strip_unsupported_lines(intermediate)
        if dropped:
            self.logger.info(f"dumpconf가 해석하지 못한 구문 {dropped}줄 제거: {kconfig_file.name}")

        return self.parser.parse_file(intermediate)
