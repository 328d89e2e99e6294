import argparse
from pathlib import Path

from common.model.config import AppConfig, CollectConfig
from common.support.env import load_env_defaults, parse_timeout


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tpch-collect",
        description="Collect one TPC-H benchmark run into a semicolon-separated record.",
    )

    parser.add_argument(
        "input",
        type=Path,
        help="Directory with the run artifacts (stats-*.log, results.log, explain/, bench.log)",
    )

    parser.add_argument(
        "output",
        type=Path,
        help="Output file to create; must not exist yet",
    )

    parser.add_argument(
        "--timeout",
        default=None,
        help="Query timeout in seconds; slower queries are recorded as cancelled (default: 300)",
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on garbled results.log lines instead of coercing them",
    )

    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Optional .env with QUERY_TIMEOUT / STRICT_RESULTS / VERBOSE defaults",
    )

    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only report errors",
    )

    return parser


def parse_cli_args(argv: list[str] | None = None) -> AppConfig:
    """
    Parses command line arguments (over .env defaults) into an AppConfig.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    env = load_env_defaults(env_path=args.env_file)

    timeout = parse_timeout("--timeout", args.timeout, env.query_timeout)

    cfg = CollectConfig(
        input_dir=args.input.expanduser(),
        output_path=args.output.expanduser(),
        query_timeout=timeout,
        strict_results=bool(args.strict) or env.strict_results,
    )

    return AppConfig(cfg=cfg, verbose=env.verbose and not args.quiet)
