"""
Command line entry point: `lambda-lift [args...]`.

The launcher defines no options of its own; every argument is passed on.
"""

import sys
from typing import List, Optional

from lambda_lift_launcher.launcher import Launcher
from lambda_lift_launcher.launcher_config import LauncherConfig
from lambda_lift_launcher.launcher_exceptions import LauncherException
from lambda_lift_launcher.launcher_logger import LauncherLogger, configure_logging

EXIT_FAILURE = 1


def print_remediation(error: LauncherException, config: LauncherConfig) -> None:
    print(f"Error: {error}\n", file=sys.stderr)
    print("To fix this, try one of the following:", file=sys.stderr)
    print(f"  1. Install Node.js and run: npm install -g {config.tool_name}", file=sys.stderr)
    print(f"  2. Download the binary manually from: {config.releases_page}", file=sys.stderr)


def main(argv: Optional[List[str]] = None, config: Optional[LauncherConfig] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    config = config or LauncherConfig()
    configure_logging()
    logger = LauncherLogger()

    try:
        launcher = Launcher(config, logger)
        result = launcher.launch(args)
    except LauncherException as e:
        print_remediation(e, config)
        return EXIT_FAILURE

    if not result.started:
        print(f"Error running {config.tool_name}: {result.error}", file=sys.stderr)
        return EXIT_FAILURE
    return result.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
