"""Command-line interface for taskline.

This module reads commands from standard input, one per line, until 'bye' or
end of input. Supported commands:
- todo <description>
- deadline <description> /by <date>
- event <description> /at <date>
- list, find <keyword>
- mark <n>, unmark <n>, delete <n>
- stats today | this week | this month | <days>
- bye
"""

import argparse
import logging
import sys
from typing import Iterable, List, Optional, TextIO

from taskline import ui
from taskline.config import get_settings
from taskline.dispatcher import CommandDispatcher
from taskline.errors import CommandError, PersistenceError
from taskline.logging_setup import setup_logging
from taskline.storage import JsonStorage, Storage
from taskline.store import TaskStore

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="taskline",
        description="Line-oriented task manager. Type commands, one per line; 'bye' exits."
    )
    parser.add_argument(
        "--file",
        help="Task file to load and save (default: $TASKLINE_DB_PATH or tasks.json)"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Level of diagnostics written to stderr (default: $TASKLINE_LOG_LEVEL or WARNING)"
    )
    parser.add_argument(
        "--log-file",
        help="Also write every log record to this file"
    )
    return parser


def load_store(storage: Storage, out: TextIO) -> TaskStore:
    """Hydrate a TaskStore from storage.

    A load failure is reported and the session starts with an empty list.
    """
    try:
        return TaskStore(storage.load())
    except PersistenceError as e:
        logger.error("Load failed: %s", e)
        print(ui.render_error(e), file=out)
        print("Starting with an empty list.", file=out)
        return TaskStore()


def run_session(dispatcher: CommandDispatcher, lines: Iterable[str], out: TextIO) -> int:
    """Feed input lines to the dispatcher until 'bye' or end of input.

    Args:
        dispatcher: Dispatcher bound to the session's store
        lines: Input lines, trailing newlines allowed
        out: Stream receiving rendered output

    Returns:
        Exit code (always 0)
    """
    print(ui.greeting(), file=out)

    for raw in lines:
        line = raw.rstrip("\n")
        if not line.strip():
            continue
        try:
            result = dispatcher.dispatch(line)
        except CommandError as e:
            logger.debug("Rejected %r: %s", line, e)
            print(ui.render_error(e), file=out)
            continue

        print(ui.render(result), file=out)
        if dispatcher.terminated:
            break

    return 0


def main(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None,
         stdout: Optional[TextIO] = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:]
        stdin: Command source. If None, uses sys.stdin
        stdout: Output stream. If None, uses sys.stdout

    Returns:
        Exit code (0 for success)
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    settings = get_settings()

    setup_logging(
        level=args.log_level or settings.log_level,
        log_file=args.log_file or settings.log_file,
    )

    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    storage = JsonStorage(args.file or settings.db_path)
    store = load_store(storage, stdout)
    dispatcher = CommandDispatcher(store, storage)

    return run_session(dispatcher, stdin, stdout)


if __name__ == "__main__":
    sys.exit(main())
