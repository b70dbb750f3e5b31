from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import ConfigError, load_config
from ..csvio.reader import BuildError, load_rows
from ..logging.init import get_logger, log_summary, set_level, setup_logging
from ..services.builder import run_build
from ..services.normalizer import normalize_rows
from ..services.summary import render_summary_line

"""CLI entrypoint: build data/shows.json from data/shows.csv.

Flow:
- Load .env (overrides process environment)
- Load config (config/build.yml if present)
- Run the build, log skipped rows, the written file and a SUMMARY line

Exit codes: 0 success (skipped rows included), 1 fatal (nothing written).
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1

INSPECT_SAMPLE_ROWS = 3


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv; missing file is fine."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="shows.csv -> shows.json builder")
    p.add_argument("--config", type=Path, default=None, help="YAML config (default: config/build.yml if present)")
    p.add_argument("--input", type=Path, default=None, help="Input CSV path (overrides config)")
    p.add_argument("--output", type=Path, default=None, help="Output JSON path (overrides config)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print header & first normalized rows then exit")
    return p.parse_args(argv)


def _inspect_data(cfg) -> int:
    logger = get_logger()
    try:
        header, data_rows = load_rows(cfg.input_path)
        result = normalize_rows(header, data_rows, cfg.columns)
    except BuildError as e:
        logger.error(f"inspect: {e}")
        return EXIT_FATAL

    print(f"FILE: {cfg.input_path.as_posix()} rows={len(data_rows)}")
    print(f"  header={[h.strip() for h in header]}")
    for record in result.records[:INSPECT_SAMPLE_ROWS]:
        print(f"  {record.to_dict()}")
    for diag in result.diagnostics:
        print(f"  skip: {diag}")
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # argv=[] (テストからの呼び出し) では sys.argv を読まない
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    _load_env_file(Path(".env"), override=True)

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL
    cfg = cfg.with_overrides(input_path=args.input, output_path=args.output)

    if args.debug:
        set_level("DEBUG")
        logger.debug("debug mode enabled")

    if args.inspect_data:
        return _inspect_data(cfg)

    logger.debug(f"input={cfg.input_path.as_posix()} output={cfg.output_path.as_posix()}")
    try:
        result = run_build(cfg)
    except BuildError as e:
        logger.error(str(e))
        return EXIT_FATAL

    # log_summary adds the "SUMMARY " prefix
    log_summary(render_summary_line(result)[len("SUMMARY "):])
    return EXIT_SUCCESS
