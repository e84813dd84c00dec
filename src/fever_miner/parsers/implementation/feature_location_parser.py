"""cppstats featurelocations CSV 파서

헤더: FILENAME,LINE_START,LINE_END,TYPE,EXPRESSION,CONSTANTS
CONSTANTS 열은 ';' 로 구분된 feature 상수 목록입니다.
"""

import csv
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from fever_miner.exceptions import InvalidToolOutputError
from fever_miner.models.implementation_model import CodeBlock

logger = logging.getLogger(__name__)

CONSTANT_SEPARATOR = re.compile(r'[;\s]+')


@dataclass(frozen=True)
class FeatureLocation:
    """CSV의 한 행"""
    file_name: str
    start_line: int
    end_line: int
    block_type: str
    expression: str
    constants: Tuple[str, ...] = ()

    def describes(self, staged_file_name: str) -> bool:
        """스테이징된 소스 파일에 대한 행인지 여부

        cppstats는 srcML 변환 결과(`foo.c.xml`) 경로를 기록하기도 합니다.
        """
        name = Path(self.file_name).name
        return name == staged_file_name or name.startswith(staged_file_name + ".")

    def to_code_block(self) -> CodeBlock:
        return CodeBlock(
            start_line=self.start_line,
            end_line=self.end_line,
            block_type=self.block_type,
            expression=self.expression,
            constants=self.constants,
        )


def split_constants(value: str) -> Tuple[str, ...]:
    return tuple(part for part in CONSTANT_SEPARATOR.split(value.strip()) if part)


class FeatureLocationParser:
    """featurelocations CSV → FeatureLocation 목록"""

    REQUIRED_COLUMNS = ('FILENAME', 'LINE_START', 'LINE_END', 'TYPE', 'EXPRESSION')

    def parse_file(self, csv_path: Path) -> List[FeatureLocation]:
        """
        Raises:
            InvalidToolOutputError: 필수 열이 없거나 CSV 형식이 깨진 경우
        """
        try:
            with open(csv_path, 'r', encoding='utf-8', errors='replace', newline='') as f:
                return self.parse_rows(csv.DictReader(f))
        except csv.Error as e:
            raise InvalidToolOutputError(f"featurelocations CSV malformed: {e}", str(csv_path)) from e

    def parse_rows(self, reader) -> List[FeatureLocation]:
        fieldnames = [name.strip().upper() for name in (reader.fieldnames or [])]
        missing = [column for column in self.REQUIRED_COLUMNS if column not in fieldnames]
        if missing:
            raise InvalidToolOutputError(f"featurelocations CSV missing columns: {', '.join(missing)}")

        locations: List[FeatureLocation] = []
        for line_number, row in enumerate(reader, start=2):
            normalized = {(key or '').strip().upper(): (value or '') for key, value in row.items()}
            try:
                start = int(normalized['LINE_START'])
                end = int(normalized['LINE_END'])
            except ValueError:
                logger.warning(f"featurelocations {line_number}행의 라인 번호를 해석할 수 없어 건너뜀")
                continue

            locations.append(FeatureLocation(
                file_name=normalized['FILENAME'].strip(),
                start_line=start,
                end_line=end,
                block_type=normalized['TYPE'].strip(),
                expression=normalized['EXPRESSION'].strip(),
                constants=split_constants(normalized.get('CONSTANTS', '')),
            ))

        logger.debug(f"feature location {len(locations)}개 파싱")
        return locations
