from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, List, Optional

from .answers import parse_answer
from .catalog import available_trees, build_from_spec, get_spec, load_tree
from .config import get_settings
from .session import Session
from .texts import BLANK_WORD, INVALID_ANSWER, WORD_PROMPT
from .tree import DecisionTree, TreeDefectError
from .walker import depth, leaf_paths


log = logging.getLogger("treewalker.cli")

Reader = Callable[[str], str]
Writer = Callable[[str], None]

EXIT_ABANDONED = 1
EXIT_SOFTWARE = 70
EXIT_INTERRUPTED = 130


def ask_word(slot: str, read: Reader, write: Writer) -> str:
    while True:
        word = read(WORD_PROMPT.format(slot=slot) + " ").strip()
        if word:
            return word
        write(BLANK_WORD)


def ask_answer(prompt: str, read: Reader, write: Writer) -> bool:
    while True:
        value = parse_answer(read(f"{prompt} (yes/no): "))
        if value is not None:
            return value
        write(INVALID_ANSWER)


def run_session(tree: DecisionTree, read: Reader = input, write: Writer = print) -> Session:
    """
    Drive one walk over ``tree`` on a line-oriented console.

    Words are collected for every placeholder of a node before it is shown;
    questions are repeated until the reply is yes/no. The leaf is printed once
    and nothing more is read after it.
    """

    session = Session(tree)
    while True:
        while session.pending_slot:
            session.supply_word(ask_word(session.pending_slot, read, write))
        if session.finished:
            write(session.content)
            return session
        session.answer(ask_answer(session.content, read, write))


def _format_path(answers) -> str:
    if not answers:
        return "(root)"
    return " -> ".join("yes" if answer else "no" for answer in answers)


def cmd_play(args: argparse.Namespace) -> int:
    try:
        spec = get_spec(args.tree)
    except KeyError as exc:
        print(exc.args[0], file=sys.stderr)
        return 2
    print(spec.intro)
    try:
        run_session(load_tree(spec.name))
    except EOFError:
        print("\nSession abandoned.")
        return EXIT_ABANDONED
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    for spec in available_trees():
        print(f"{spec.name:<10} {spec.title}")
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    failed = False
    for spec in available_trees():
        try:
            tree = build_from_spec(spec)
            print(f"{spec.name}: {len(tree)} nodes, {len(tree.leaves())} leaves, depth {depth(tree)}")
        except TreeDefectError as exc:
            log.error("%s", exc)
            print(f"{spec.name}: BROKEN ({exc})")
            failed = True
    return 1 if failed else 0


def cmd_paths(args: argparse.Namespace) -> int:
    tree = load_tree(get_spec(args.tree).name)
    for answers, leaf in leaf_paths(tree):
        print(f"{_format_path(answers)}: {leaf.text}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    tree_names = [spec.name for spec in available_trees()]
    parser = argparse.ArgumentParser(
        prog="treewalker",
        description="Walk yes/no decision trees on the console.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Walk a tree interactively")
    play_parser.add_argument("tree", nargs="?", choices=tree_names, help="Tree to walk")
    play_parser.set_defaults(handler=cmd_play)

    list_parser = subparsers.add_parser("list", help="List the available trees")
    list_parser.set_defaults(handler=cmd_list)

    check_parser = subparsers.add_parser("check", help="Validate every tree")
    check_parser.set_defaults(handler=cmd_check)

    paths_parser = subparsers.add_parser("paths", help="Show every answer path and its outcome")
    paths_parser.add_argument("tree", choices=tree_names, help="Tree to inspect")
    paths_parser.set_defaults(handler=cmd_paths)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    settings = get_settings()
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    if args.command is None:
        args.command = "play"
        args.handler = cmd_play
    if getattr(args, "tree", None) is None and args.command == "play":
        args.tree = settings.default_tree

    try:
        return args.handler(args)
    except KeyboardInterrupt:
        print()
        return EXIT_INTERRUPTED
    except TreeDefectError:
        log.exception("Walk aborted")
        return EXIT_SOFTWARE


if __name__ == "__main__":
    sys.exit(main())
