import sys

from cli import parse_cli_args
from common.model.errors import CollectError, ConfigurationError
from common.support.reporting import NullReporter, PrintReporter, Reporter
from pipeline import execute_pipeline


def main(argv: list[str] | None = None) -> int:
    err = PrintReporter(stream=sys.stderr)

    try:
        app = parse_cli_args(argv)
        reporter: Reporter = PrintReporter() if app.verbose else NullReporter()
        execute_pipeline(app.cfg, reporter=reporter)
    except ConfigurationError as e:
        err.info(f"ERROR: {e}")
        return 2
    except CollectError as e:
        err.info(f"ERROR: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
