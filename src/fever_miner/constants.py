"""
아티팩트 분류 테이블 정의 모듈

이 모듈은 파일 이름/확장자 기반 분류 테이블을 중앙에서 관리합니다.
로직이 아닌 설정 데이터이며, 분류기는 이 테이블만 참조합니다.
"""

from typing import FrozenSet, Tuple


# 삭제/추가된 쪽을 나타내는 경로 (git 관례)
DEV_NULL = "/dev/null"

# git의 zero object id (부재 핸들)
ZERO_OBJECT_ID = "0" * 40

# 빈 트리 객체 id (루트 커밋의 비교 대상)
EMPTY_TREE_ID = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"

# 가변성 모델 파일 (이름 또는 접두사)
VARIABILITY_FILE_NAMES: FrozenSet[str] = frozenset({'Kconfig', 'Config.in'})
VARIABILITY_FILE_PREFIXES: Tuple[str, ...] = ('Kconfig.',)

# 빌드/매핑 파일
BUILD_FILE_NAMES: FrozenSet[str] = frozenset({'Makefile', 'Kbuild'})
BUILD_FILE_PREFIXES: Tuple[str, ...] = ('Makefile.', 'Kbuild.')
BUILD_FILE_EXTENSIONS: FrozenSet[str] = frozenset({'.mk', '.map'})

# 구현 소스 파일
SOURCE_FILE_EXTENSIONS: FrozenSet[str] = frozenset({
    '.c', '.h', '.cc', '.cpp', '.cxx', '.hh', '.hpp'
})

# 파일 내용 타입 테이블 (서로 겹치지 않음)
DATA_FILE_EXTENSIONS: FrozenSet[str] = frozenset({
    '.json', '.xml', '.csv', '.yml', '.yaml',
    '.dts', '.dtsi', '.conf', '.cfg', '.ini'
})

BINARY_FILE_EXTENSIONS: FrozenSet[str] = frozenset({
    '.bin', '.o', '.a', '.so', '.ko', '.fw',
    '.png', '.jpg', '.jpeg', '.gif', '.ico', '.bmp',
    '.zip', '.gz', '.xz', '.bz2', '.tar'
})

DOCUMENTATION_FILE_EXTENSIONS: FrozenSet[str] = frozenset({
    '.md', '.rst', '.txt', '.tex', '.html', '.adoc', '.pdf'
})

DOCUMENTATION_FILE_NAMES: FrozenSet[str] = frozenset({
    'README', 'COPYING', 'CREDITS', 'MAINTAINERS'
})

# cppstats 결과 파일 이름 (프로젝트 루트에 생성됨)
FEATURE_LOCATIONS_FILE = "cppstats_featurelocations.csv"

# dumpconf가 해석하지 못한 구문을 알리는 줄의 접미사
UNSUPPORTED_MARKER = "not supported"
