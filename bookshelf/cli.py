"""Command-line interface for bookshelf."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from bookshelf import __version__
from bookshelf.client.books import BooksClient
from bookshelf.config import Config
from bookshelf.manager import ActionResult, BookManager
from bookshelf.models import SortMode
from bookshelf.utils.logging import setup_logging

SORT_CHOICES = {"asc": SortMode.ASCENDING, "desc": SortMode.DESCENDING}


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="bookshelf",
        description="Browse and edit the books of a remote catalog",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output (DEBUG level)",
    )

    parser.add_argument(
        "--env-file",
        type=str,
        help="Path to .env file (default: .env in current directory)",
    )

    parser.add_argument(
        "--sort",
        choices=sorted(SORT_CHOICES),
        help="Order the listing by name",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("list", help="List all books")

    add = commands.add_parser("add", help="Create a book")
    add.add_argument("name")
    add.add_argument("image", help="JPG or PNG cover image")

    edit = commands.add_parser("edit", help="Rename a book or replace its image")
    edit.add_argument("id", type=int)
    edit.add_argument("--name")
    edit.add_argument("--image", help="JPG or PNG cover image")

    delete = commands.add_parser("delete", help="Delete books by id")
    delete.add_argument("ids", type=int, nargs="+")
    delete.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")

    return parser.parse_args(argv)


def _confirm(prompt: str) -> bool:
    answer = input(f"{prompt} [y/N] ")
    return answer.strip().lower() in ("y", "yes")


def _report(result: ActionResult, logger: logging.Logger) -> bool:
    if result.ok:
        if result.message:
            logger.info(result.message)
        return True
    if result.error is not None:
        logger.error(f"{result.error.title}: {result.message}")
    return False


def print_books(manager: BookManager) -> None:
    for book in manager.collection.display_books or []:
        print(f"{book.id:>6}  {book.name}")


def run_command(manager: BookManager, args: argparse.Namespace, logger: logging.Logger) -> int:
    """Run one subcommand against a freshly loaded collection."""
    if not _report(manager.request_list(), logger):
        return 1
    if args.sort:
        manager.set_sort(SORT_CHOICES[args.sort])

    if args.command == "add":
        manager.open_new_edit()
        manager.session.book.name = args.name
        if not _report(manager.choose_image(args.image), logger):
            return 1
        if not _report(manager.save(), logger):
            return 1
        # New books only appear after a fresh fetch
        if not _report(manager.request_list(), logger):
            return 1
        if args.sort:
            manager.set_sort(SORT_CHOICES[args.sort])

    elif args.command == "edit":
        manager.toggle_select(args.id, True)
        if not _report(manager.open_edit_existing(), logger):
            return 1
        if args.name is not None:
            manager.session.book.name = args.name
        if args.image and not _report(manager.choose_image(args.image), logger):
            return 1
        if not _report(manager.save(), logger):
            return 1

    elif args.command == "delete":
        for book_id in args.ids:
            manager.toggle_select(book_id, True)
        confirm = None if args.yes else _confirm
        result = manager.delete_selected(confirm=confirm)
        if result.cancelled:
            logger.info("Nothing deleted")
            return 0
        if not _report(result, logger):
            return 1

    print_books(manager)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        env_file = Path(args.env_file) if args.env_file else None
        config = Config.from_env(env_file)
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logger = setup_logging(config.log_path, log_level)

    logger.debug(f"bookshelf v{__version__} using {config.api_url}/{config.api_resource}")

    with BooksClient(config.api_url, config.api_resource, config.timeout) as client:
        manager = BookManager(client)
        try:
            return run_command(manager, args, logger)
        except KeyboardInterrupt:
            logger.info("\nInterrupted by user")
            return 130
        except Exception as e:
            logger.exception(f"Unexpected error: {e}")
            return 1


if __name__ == "__main__":
    sys.exit(main())
