"""Terminal session for judging a directory of photos pair by pair.

Usage:
    photobracket ~/Pictures/trip --recursive --check
"""

# Photo Bracket
# Copyright (C) 2025  Photo Bracket developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import sys
from typing import Callable, List, Optional, Sequence, Tuple

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style
from PyQt6 import QtCore

from photobracket import APP_NAME, APP_VERSION
from photobracket.config import BracketConfig
from photobracket.constants import (
    CMD_KEEP_BOTH,
    CMD_KEEP_LEFT,
    CMD_KEEP_NEITHER,
    CMD_KEEP_RIGHT,
    CMD_QUIT,
    CMD_REDO,
    CMD_SKIP,
    CMD_UNDO,
    COMMAND_HELP,
    DEFAULT_IMAGE_EXTENSIONS,
)
from photobracket.controllers.bracket import Bracket
from photobracket.controllers.loader import LoggingProgress
from photobracket.exceptions import PhotoBracketException
from photobracket.models.image_file import ImageFile, discover_images
from photobracket.utils import set_verbose, setup_logger

logger = setup_logger(__name__)

Reader = Callable[[str], str]
Writer = Callable[[str], None]


def favorites(bracket: Bracket) -> List[ImageFile]:
    """Everything still in the running, including a pair awaiting a verdict."""
    files = bracket.get_all_image_files()
    if bracket.presented is not None:
        files.extend(bracket.presented)
    return files


def check_images(bracket: Bracket, write: Writer = print) -> LoggingProgress:
    """Decode every photo once, report the unreadable ones, then free memory.

    Unreadable photos stay in the bracket; deciding about them is up to the judge.
    """
    # Image format plugins are located through the application instance
    _app = QtCore.QCoreApplication.instance() or QtCore.QCoreApplication(
        sys.argv[:1]
    )
    progress = LoggingProgress()
    bracket.load_all(progress)
    bracket.flush_all()
    for item, error in progress.failed:
        write(f"warning: {error}")
    return progress


def _show_pair(bracket: Bracket, pair: Tuple[ImageFile, ImageFile], write: Writer):
    write("")
    write(
        f"Round {bracket.round_count + 1}: {bracket.get_round_size()} waiting, "
        f"{bracket.size()} in play"
    )
    write(f"  [{CMD_KEEP_LEFT}] {pair[0]}")
    write(f"  [{CMD_KEEP_RIGHT}] {pair[1]}")


def _show_help(write: Writer):
    write("  " + "  ".join(f"{key}={label}" for key, label in COMMAND_HELP.items()))


def create_completer() -> WordCompleter:
    """Complete the session commands."""
    return WordCompleter(list(COMMAND_HELP) + ["y", "n"], ignore_case=True)


def create_reader() -> Reader:
    """Build the interactive prompt used when no reader is supplied."""
    style = Style.from_dict(
        {
            "prompt": "#00aa00 bold",
        }
    )
    session = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=style,
    )
    return session.prompt


def _ask(read: Reader, prompt: str) -> str:
    try:
        return read(prompt).strip().lower()
    except EOFError:
        return CMD_QUIT


def run_session(
    bracket: Bracket, read: Optional[Reader] = None, write: Writer = print
) -> List[ImageFile]:
    """Present pairs until the judge quits or nothing is left to compare.

    Args:
        bracket: Bracket to drive
        read: Prompt function, an interactive prompt by default
        write: Output function, ``print`` by default

    Returns:
        The photos still in the running
    """
    if read is None:
        read = create_reader()
    pair = None
    while True:
        if pair is None:
            if not bracket.has_next_pair():
                if bracket.size() < 2:
                    break
                answer = _ask(
                    read, "No more pairs this round. Keep narrowing? [y/N] "
                )
                if answer not in ("y", "yes"):
                    break
                bracket.ignore_done()
                if not bracket.has_next_pair():
                    break
                continue
            pair = bracket.get_next_pair()
            if pair is None:
                continue

        _show_pair(bracket, pair, write)
        command = _ask(read, "> ")

        if command == CMD_QUIT:
            break
        elif command == CMD_KEEP_LEFT:
            bracket.selected(pair[0])
            pair = None
        elif command == CMD_KEEP_RIGHT:
            bracket.selected(pair[1])
            pair = None
        elif command == CMD_KEEP_BOTH:
            bracket.selected(*pair)
            pair = None
        elif command == CMD_KEEP_NEITHER:
            bracket.selected()
            pair = None
        elif command == CMD_SKIP:
            pair = bracket.get_new_files()
        elif command == CMD_UNDO:
            if not bracket.undo():
                write("Nothing to undo")
            pair = None
        elif command == CMD_REDO:
            if bracket.redo():
                pair = None
            else:
                write("Nothing to redo")
        else:
            _show_help(write)

    return favorites(bracket)


def run(
    config: BracketConfig,
    directory: str,
    read: Optional[Reader] = None,
    write: Writer = print,
) -> int:
    """Scan ``directory``, judge its photos and print the survivors.

    Returns:
        Exit code
    """
    images = discover_images(directory, config.extensions, config.recursive)
    if not images:
        write(f"No photos found in {directory}")
        return 0

    bracket = Bracket(images)
    if config.check_images:
        check_images(bracket, write)

    write(f"{len(images)} photo(s) loaded. Commands:")
    _show_help(write)
    survivors = run_session(bracket, read, write)

    write("")
    write(f"{len(survivors)} favorite(s) after {bracket.round_count + 1} round(s):")
    for image in survivors:
        write(str(image))
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="photobracket",
        description=f"{APP_NAME}: narrow a directory of photos down to favorites",
    )
    parser.add_argument("directory", help="Directory containing the photos")
    parser.add_argument(
        "--recursive", action="store_true", help="Include photos in subdirectories"
    )
    parser.add_argument(
        "--ext",
        action="append",
        metavar="EXT",
        help=(
            "Photo file extension to include, may be repeated "
            f"(default: {' '.join(DEFAULT_IMAGE_EXTENSIONS)})"
        ),
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Decode every photo before judging and report unreadable files",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {APP_VERSION}"
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for CLI.

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    set_verbose(args.verbose)

    try:
        config = BracketConfig(
            extensions=args.ext or list(DEFAULT_IMAGE_EXTENSIONS),
            recursive=args.recursive,
            check_images=args.check,
            verbose=args.verbose,
        )
        return run(config, args.directory)
    except KeyboardInterrupt:
        logger.info("Session interrupted by user")
        return 130
    except (PhotoBracketException, OSError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
