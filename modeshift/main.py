"""
main.py
-------
Entry point: load settings and run the pygame shell.

Usage:
    modeshift                       # Default settings.json
    modeshift --config my.json      # Custom overrides
    modeshift --no-preload          # Load the session only when NEXT is pressed
"""

import argparse
import asyncio
import sys

from modeshift.core.debug.debug_logger import DebugLogger
from modeshift.core.runtime.app_settings import Loading, apply_settings
from modeshift.core.runtime.errors import LoadFailure
from modeshift.core.services.config_manager import load_config


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="modeshift mode controller demo")
    parser.add_argument("--config", default="settings.json",
                        help="JSON settings file (searched in ., config/ and the package)")
    parser.add_argument("--no-preload", action="store_true",
                        help="Disable loading the session during the cutscene")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    apply_settings(load_config(args.config))
    if args.no_preload:
        Loading.PRELOAD_ACTIVE = False

    # Imported late so settings are applied before pygame modules read them
    from modeshift.core.runtime.main_loop import MainLoop
    from modeshift.stages import STAGE_CLASSES

    loop = MainLoop(STAGE_CLASSES)
    try:
        asyncio.run(loop.run())
    except LoadFailure as e:
        DebugLogger.fail(f"Startup failed: {e}")
        return 1
    except KeyboardInterrupt:
        DebugLogger.action("Interrupted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
