import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from .core.config import Config
from .core.value import Value, ValueType
from .errors import ConfigError
from .loader import load
from .settings import DEFAULT_MAX_DEPTH, ParserSettings


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jelly-config",
        description="Validate a config file and print its parsed tree"
    )
    parser.add_argument(
        "file",
        type=Path,
        help="Config file to parse"
    )
    parser.add_argument(
        "--format",
        choices=["tree", "text", "json"],
        default="tree",
        help="Output format (default: tree)"
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        help="Maximum nesting depth of objects and lists"
    )
    parser.add_argument(
        "--allow-trailing-commas",
        action="store_true",
        help="Accept a comma before a closing ']' or '}'"
    )
    parser.add_argument(
        "--strict-keys",
        action="store_true",
        help="Reject duplicate keys instead of keeping the last one"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    return parser


def setup_logging(verbose: bool) -> logging.Logger:
    """Send package logs to stderr"""
    logger = logging.getLogger("jelly_config")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(
            logging.Formatter('%(levelname)s: %(message)s')
        )
        logger.addHandler(console_handler)
    return logger


def _add_value(tree: Tree, label: str, value: Value) -> None:
    if value.type is ValueType.OBJECT:
        branch = tree.add(f"[bold]{escape(label)}[/bold]")
        for key, child in value.data.items():
            _add_value(branch, key, child)
    elif value.type is ValueType.LIST:
        branch = tree.add(f"[bold]{escape(label)}[/bold] [dim]({len(value.data)} items)[/dim]")
        for index, child in enumerate(value.data):
            _add_value(branch, f"[{index}]", child)
    else:
        tree.add(f"{escape(label)} = [cyan]{escape(value.to_text())}[/cyan]")


def build_tree(config: Config, title: str) -> Tree:
    """Create Rich tree of a parsed config"""
    tree = Tree(f"[bold blue]{escape(title)}[/bold blue]")
    for key, value in config.items():
        _add_value(tree, key, value)
    return tree


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logger = setup_logging(args.verbose)
    console = Console()
    error_console = Console(stderr=True)

    try:
        settings = ParserSettings(
            max_depth=args.max_depth,
            allow_trailing_commas=args.allow_trailing_commas,
            allow_duplicate_keys=not args.strict_keys
        )
    except ValueError as e:
        error_console.print(f"[red]Invalid settings:[/red] {escape(str(e))}", soft_wrap=True)
        return 1

    try:
        config = load(args.file, settings)
    except ConfigError as e:
        error_console.print(f"[red]{type(e).__name__}:[/red] {escape(str(e))}", soft_wrap=True)
        return 1

    logger.debug(f"Rendering {len(config)} keys as {args.format}")
    if args.format == "json":
        console.out(json.dumps(config.to_python(), indent=2), highlight=False)
    elif args.format == "text":
        console.out(config.to_text(), highlight=False)
    else:
        console.print(build_tree(config, str(args.file)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
