"""fever-miner 테스트를 위한 pytest 설정"""

import csv
import re
import tempfile
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional, Tuple
import pytest

from fever_miner.change.artefact_diff import ArtefactDiff
from fever_miner.config.settings import FeverConfig
from fever_miner.constants import FEATURE_LOCATIONS_FILE
from fever_miner.exceptions import CommitResolutionError, MissingObjectError
from fever_miner.repository.repository_access import RepositoryAccess
from fever_miner.tools.tool_executor import ToolExecutor
from fever_miner.tools.tool_result import ToolResult


def pytest_configure(config):
    """pytest 설정을 구성합니다. 단위/통합 테스트용 마커들을 등록합니다."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """테스트용 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


class FakeRepository(RepositoryAccess):
    """메모리 기반 저장소

    커밋은 (부모, diff 목록)으로, blob은 바이트로 등록합니다.
    """

    def __init__(self):
        self.commits: Dict[str, Tuple[Optional[str], List[ArtefactDiff]]] = {}
        self.blobs: Dict[str, bytes] = {}
        self.closed = False

    def add_commit(self, commit_id: str, parent: Optional[str],
                   diffs: Optional[List[ArtefactDiff]] = None) -> None:
        self.commits[commit_id] = (parent, list(diffs or []))

    def add_blob(self, blob_id: str, content: str) -> None:
        self.blobs[blob_id] = content.encode('utf-8')

    def resolve(self, commit_id: str) -> str:
        if commit_id not in self.commits:
            raise CommitResolutionError(f"Cannot resolve commit: {commit_id}")
        return commit_id

    def first_parent_chain(self, commit_id: str, count: int) -> List[str]:
        chain = []
        current = commit_id
        while current is not None and len(chain) < count:
            chain.append(current)
            current = self.commits[current][0]
        return chain

    def parent_of(self, commit_id: str) -> Optional[str]:
        return self.commits[commit_id][0]

    def diff(self, base: Optional[str], target: str) -> List[ArtefactDiff]:
        # base..target 사이 커밋들의 diff를 오래된 순으로 이어 붙임
        collected: List[List[ArtefactDiff]] = []
        current = target
        while current is not None and current != base:
            parent, diffs = self.commits[current]
            collected.append(diffs)
            current = parent
        return [diff for diffs in reversed(collected) for diff in diffs]

    def restore_blob(self, blob_id: str, target_path: str) -> None:
        if blob_id not in self.blobs:
            raise MissingObjectError(f"Missing object {blob_id}")
        Path(target_path).write_bytes(self.blobs[blob_id])

    def close(self) -> None:
        self.closed = True


CONFIG_LINE = re.compile(r'^\s*(?:menu)?config\s+(\w+)')
CONDITIONAL_OPEN = re.compile(r'^\s*#\s*(ifdef|ifndef|if)\s+(.*)$')
CONDITIONAL_CLOSE = re.compile(r'^\s*#\s*endif\b')
SYMBOL = re.compile(r'CONFIG_\w+')


def scan_conditionals(source_file: Path) -> List[Dict[str, Any]]:
    """#if/#ifdef ~ #endif 블록을 featurelocations 행으로 변환"""
    rows = []
    stack: List[Tuple[int, str, str]] = []
    lines = source_file.read_text(encoding='utf-8').splitlines()
    for number, line in enumerate(lines, start=1):
        opened = CONDITIONAL_OPEN.match(line)
        if opened:
            stack.append((number, f"#{opened.group(1)}", opened.group(2).strip()))
            continue
        if CONDITIONAL_CLOSE.match(line) and stack:
            start, block_type, expression = stack.pop()
            rows.append({
                'FILENAME': str(source_file),
                'LINE_START': start,
                'LINE_END': number,
                'TYPE': block_type,
                'EXPRESSION': expression,
                'CONSTANTS': ';'.join(SYMBOL.findall(expression)),
            })
    return rows


class FakeToolExecutor(ToolExecutor):
    """외부 바이너리 대신 출력 파일을 직접 만드는 실행기

    - dump_config_model: `config X` 줄마다 Item 레코드 기록
    - scan_feature_locations: source 폴더의 조건부 블록을 CSV로 기록
    """

    def __init__(self, returncode: int = 0, write_outputs: bool = True,
                 unsupported_lines: int = 0):
        super().__init__(FeverConfig())
        self.returncode = returncode
        self.write_outputs = write_outputs
        self.unsupported_lines = unsupported_lines
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.manifests: List[str] = []

    def execute_tool_call(self, tool_name: str, parameters: Dict[str, Any]) -> ToolResult:
        self.calls.append((tool_name, dict(parameters)))
        if tool_name == "dump_config_model":
            output_path = parameters["output_path"]
            if self.write_outputs:
                self._dump_config(Path(parameters["input_path"]), Path(output_path))
            else:
                # 출력 파일을 남기지 않은 도구 흉내
                Path(output_path).unlink(missing_ok=True)
        elif tool_name == "scan_feature_locations":
            self.manifests.append(Path(parameters["manifest_path"]).read_text(encoding='utf-8'))
            output_path = str(Path(parameters["project_dir"]) / FEATURE_LOCATIONS_FILE)
            if self.write_outputs:
                self._scan(Path(parameters["project_dir"]), Path(output_path))
        else:
            raise AssertionError(f"unexpected tool call: {tool_name}")

        return ToolResult(
            success=self.returncode == 0,
            data={"returncode": self.returncode, "stdout": "", "stderr": "", "command": [tool_name]},
            error_message=None if self.returncode == 0 else "tool failed",
            metadata={"output_path": output_path},
        )

    def calls_to(self, tool_name: str) -> List[Dict[str, Any]]:
        return [params for name, params in self.calls if name == tool_name]

    def _dump_config(self, kconfig: Path, output: Path) -> None:
        lines = [f"line {n}: construct not supported" for n in range(self.unsupported_lines)]
        for line in kconfig.read_text(encoding='utf-8').splitlines():
            matched = CONFIG_LINE.match(line)
            if matched:
                lines.append(f"Item\t{matched.group(1)}\tboolean")
        output.write_text('\n'.join(lines) + '\n', encoding='utf-8')

    def _scan(self, project_dir: Path, output: Path) -> None:
        rows = []
        for source_file in sorted((project_dir / "source").iterdir()):
            rows.extend(scan_conditionals(source_file))
        with open(output, 'w', encoding='utf-8', newline='') as f:
            writer = csv.DictWriter(
                f, fieldnames=['FILENAME', 'LINE_START', 'LINE_END', 'TYPE', 'EXPRESSION', 'CONSTANTS']
            )
            writer.writeheader()
            writer.writerows(rows)


@pytest.fixture
def fake_repository() -> FakeRepository:
    return FakeRepository()


@pytest.fixture
def fake_tool_executor() -> FakeToolExecutor:
    return FakeToolExecutor()


@pytest.fixture
def scratch_dir(temp_dir) -> Path:
    path = temp_dir / "scratch"
    path.mkdir()
    return path


@pytest.fixture
def fever_config(scratch_dir) -> FeverConfig:
    config = FeverConfig()
    config.extraction.scratch_dir = str(scratch_dir)
    return config


KCONFIG_OLD = """\
config FOO
\tbool "Foo support"
source "drivers/foo/Kconfig"
"""

KCONFIG_NEW = """\
config FOO
\tbool "Foo support"
\tdepends on BAR == y

config BAZ
\tbool "Baz support"
"""

MAKEFILE_OLD = """\
obj-$(CONFIG_FOO) += foo.o
"""

MAKEFILE_NEW = """\
obj-$(CONFIG_FOO) += foo.o
obj-$(CONFIG_BAZ) += baz.o
"""

SOURCE_OLD = """\
int a;
#ifdef CONFIG_FOO
int foo;
#endif
int b;
"""

SOURCE_NEW = """\
int a;
#ifdef CONFIG_FOO
int foo;
int foo2;
#endif
int b;
int c;
"""


@pytest.fixture
def three_domain_repository(fake_repository) -> FakeRepository:
    """가변성/매핑/소스 파일을 하나씩 수정하는 커밋 c1을 가진 저장소"""
    fake_repository.add_blob("k1", KCONFIG_OLD)
    fake_repository.add_blob("k2", KCONFIG_NEW)
    fake_repository.add_blob("m1", MAKEFILE_OLD)
    fake_repository.add_blob("m2", MAKEFILE_NEW)
    fake_repository.add_blob("s1", SOURCE_OLD)
    fake_repository.add_blob("s2", SOURCE_NEW)
    fake_repository.add_commit("c0", None)
    fake_repository.add_commit("c1", "c0", [
        ArtefactDiff.modified("drivers/Kconfig", "k1", "k2"),
        ArtefactDiff.modified("drivers/Makefile", "m1", "m2"),
        ArtefactDiff.modified("drivers/foo.c", "s1", "s2"),
    ])
    return fake_repository
