"""
destined command-line entry point.

Startup sequence:
1. Read the config file (``.destined`` unless --config is given)
2. Create the todo and history files if they do not exist
3. Parse the todo file
4. Print the config and the parsed tasks
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from destined.models.settings import DEFAULT_KEYS, REQUIRED_KEYS, DestinedSettings
from destined.parsers.config_parser import read_config_file
from destined.parsers.errors import ParsingError
from destined.parsers.task_parser import read_todo_file
from destined.utils.formatting import format_tasks

log = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = ".destined"


def _touch(path: Path) -> None:
    """Create an empty file unless one already exists."""
    try:
        with path.open("x", encoding="utf-8"):
            log.info("Created %s", path)
    except FileExistsError:
        pass
    except OSError as e:
        log.warning("Could not create %s: %s", path, e)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="destined",
        description="Parse a todo file into structured tasks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", default=DEFAULT_CONFIG_FILE,
                        help=f"Config file (default: {DEFAULT_CONFIG_FILE})")
    parser.add_argument("--json", action="store_true", help="Print tasks as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = read_config_file(args.config, REQUIRED_KEYS, DEFAULT_KEYS)
    except ParsingError as e:
        log.error("%s", e)
        return 1
    settings = DestinedSettings.model_validate(config)

    print("==========")
    print("found config keys:")
    for key, value in sorted(config.items()):
        print(f"\t{key}    =>    {value}")

    _touch(settings.todo_file)
    _touch(settings.history_file)

    try:
        tasks = read_todo_file(settings.todo_file)
    except ParsingError as e:
        log.error("%s", e)
        return 1

    print("==========")
    print("todos:")
    if args.json:
        print(json.dumps([task.to_dict() for task in tasks], indent=2))
    else:
        for line in format_tasks(tasks):
            print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
