#!/usr/bin/env python3
"""Command-line interface for computing dish nutrition facts."""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from dish_facts.app_logging import configure_logging
from dish_facts.config import Settings
from dish_facts.data_layer.exceptions import LoadError, ResolutionError
from dish_facts.data_layer.recipe_loader import RecipeLoader
from dish_facts.nutrition.resolver import RecipeResolver, TraceEvent
from dish_facts.output.formatters import (
    format_facts_json_string,
    format_facts_text,
    format_trace_event,
)

EXIT_LOAD_ERROR = 1
EXIT_RESOLUTION_ERROR = 3

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dish-facts",
        description="Compute nutrition facts per 100g for a recipe document"
    )
    parser.add_argument(
        "-r", "--recipe-file",
        type=str,
        required=True,
        help="Path to the recipe YAML file"
    )
    parser.add_argument(
        "--output",
        type=str,
        choices=["text", "json"],
        default="text",
        help="Output format: text (default) or json"
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Print each ingredient contribution to stderr"
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        help="Maximum nesting of referenced recipe documents (default: DISH_FACTS_MAX_DEPTH or 64)"
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Log level (default: DISH_FACTS_LOG_LEVEL or WARNING)"
    )
    return parser


def print_trace_event(event: TraceEvent) -> None:
    print(format_trace_event(event), file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_LOAD_ERROR)

    configure_logging(args.log_level or settings.log_level)

    max_depth = args.max_depth if args.max_depth is not None else settings.max_depth
    if max_depth < 1:
        parser.error(f"--max-depth must be positive, got {max_depth}")

    resolver = RecipeResolver(
        loader=RecipeLoader(),
        on_trace=print_trace_event if args.trace else None,
        max_depth=max_depth,
    )

    recipe_path = Path(args.recipe_file)
    try:
        facts = resolver.resolve_file(recipe_path)
    except LoadError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(EXIT_LOAD_ERROR)
    except ResolutionError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(EXIT_RESOLUTION_ERROR)

    if args.output == "json":
        print(format_facts_json_string(facts, indent=2))
    else:
        print(format_facts_text(facts, title=args.recipe_file))


if __name__ == "__main__":
    main()
