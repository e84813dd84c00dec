"""CLI 진입점

명령행에서 커밋 윈도우 추출을 실행합니다.
"""

import argparse
import sys
import logging
from typing import List, Optional

from .config.settings import FeverConfig, load_config, get_default_config_path
from .parsers.commit_info_extractor import CommitInfoExtractor


def setup_logging(level: str = "INFO",
                  fmt: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s") -> None:
    """로깅 설정

    Args:
        level: 로그 레벨
        fmt: 로그 포맷
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=fmt,
        handlers=[logging.StreamHandler(sys.stdout)]
    )


def resolve_config(config_path: Optional[str]) -> FeverConfig:
    """설정 파일 로드 (경로가 없으면 기본 위치, 기본 파일도 없으면 기본값)"""
    if config_path:
        return load_config(config_path)
    try:
        return load_config(get_default_config_path())
    except FileNotFoundError:
        return FeverConfig()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="커밋 윈도우의 가변성/빌드/구현 변경 추출",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
사용 예시:
  fever-miner --commit HEAD                          # HEAD 한 커밋을 하나의 단계로 추출
  fever-miner --commit a1b2c3 --commit d4e5f6        # 두 커밋을 하나의 단계로 추출
  fever-miner --commit a1b2c3 --commit d4e5f6 --batch  # 커밋마다 별도 단계 (배치)
  fever-miner --config custom.yml --output step.json
        """
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="설정 파일 경로 (기본값: configs/fever-miner-config.yml)"
    )

    parser.add_argument(
        "--commit",
        action="append",
        required=True,
        dest="commits",
        help="추출할 커밋 식별자 (여러 번 지정 가능)"
    )

    parser.add_argument(
        "--batch", "-b",
        action="store_true",
        help="커밋마다 별도 윈도우로 추출하고 실패를 보고서에 기록"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="결과 JSON 파일 경로 (기본값: 출력 디렉토리 아래)"
    )

    parser.add_argument(
        "--log-level", "-l",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="로그 레벨 (기본값: 설정 파일 또는 INFO)"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """메인 함수"""
    args = build_parser().parse_args(argv)

    try:
        config = resolve_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"[ERROR] 설정을 로드할 수 없습니다: {e}")
        sys.exit(2)

    log_level = args.log_level or (config.logging.level if config.logging else "INFO")
    if config.logging:
        setup_logging(log_level, config.logging.format)
    else:
        setup_logging(log_level)

    try:
        config.create_output_dirs()
        with CommitInfoExtractor(config) as extractor:
            if args.batch:
                report = extractor.extract_batch([[commit] for commit in args.commits])
                output_path = args.output or config.get_output_path("extraction_report.json")
                report.save_to_json(output_path)
                print(f"[SUCCESS] 배치 추출 완료 (성공 {report.total_steps}, "
                      f"실패 {report.total_failures}). 결과: {output_path}")
                if report.total_failures:
                    sys.exit(1)
            else:
                step = extractor.extract_step(args.commits)
                output_path = args.output or config.get_output_path("evolution_step.json")
                step.save_to_json(output_path)
                print(f"[SUCCESS] 추출 완료. 결과: {output_path}")

    except Exception as e:
        print(f"[ERROR] 실행 중 오류가 발생했습니다: {e}")
        if log_level == "DEBUG":
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
