#!/usr/bin/env python3
"""
KuriOS - A virtual filesystem driven by chat commands

This is the main entry point for the local console.

Author: YSNRFD
Version: 1.0.0
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from kurios.core.config_loader import ConfigLoader, get_config
from kurios.environment.environment import Environment
from kurios.exceptions import ConfigLoadError, EnvironmentException
from kurios.logger import Logger, LogLevel, get_logger
from kurios.shell.shell import Shell


DEFAULT_CONFIG = 'config.json'


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog='kurios', description='KuriOS console')
    parser.add_argument(
        '--config',
        default=DEFAULT_CONFIG,
        help='configuration file (optional, defaults are used when missing)'
    )
    parser.add_argument(
        '--load',
        default=None,
        help='environment file to load (default: environment.path from the config)'
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for KuriOS.

    Startup sequence:
    1. Load configuration
    2. Initialize logging
    3. Load the environment
    4. Start the console shell
    """
    args = parse_args(argv)

    if Path(args.config).exists() or args.config != DEFAULT_CONFIG:
        try:
            ConfigLoader().load(args.config)
        except ConfigLoadError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            return 1

    config = get_config()
    Logger.initialize(
        level=LogLevel.from_name(config.logging.level),
        log_file=config.logging.log_file,
        console_output=config.logging.console_output,
    )
    logger = get_logger('main')

    environment = Environment()
    environment_path = args.load or config.environment.path
    try:
        environment.load_file(environment_path)
    except EnvironmentException as e:
        # An empty environment is still usable; "load" can be retried
        logger.error(f"Could not load environment: {e.message}", context={'path': environment_path})

    shell = Shell(environment)

    try:
        shell.run()
    except KeyboardInterrupt:
        print("\n\nInterrupted")

    logger.info("Console closed")
    return 0


if __name__ == '__main__':
    sys.exit(main())
