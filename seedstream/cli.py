"""
seedstream CLI: Command-line interface for seed batches.

Provides commands for:
- generate: Derive a batch of per-unit seeds from a root seed
- check: Validate a pre-generated batch stored as JSON
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from rich.console import Console

from seedstream.display import display_seeds
from seedstream.errors import SeedError
from seedstream.seeds import batch_fingerprint, generate
from seedstream.types import SeedSpec


def parse_seed(value: str) -> Any:
    """Parse a --seed argument: ``auto``, ``reuse`` or an integer."""
    text = value.strip().lower()
    if text == SeedSpec.AUTO.value:
        return SeedSpec.AUTO
    if text == SeedSpec.REUSE_OR_AUTO.value:
        return SeedSpec.REUSE_OR_AUTO
    try:
        return int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"expected 'auto', 'reuse' or an integer, got {value!r}"
        ) from None


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="seedstream",
        description="seedstream: Reproducible RNG seeds for parallel work units",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # generate
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate one seed per work unit",
    )
    generate_parser.add_argument(
        "--count", "-n",
        type=int,
        required=True,
        help="Number of seeds to generate",
    )
    generate_parser.add_argument(
        "--seed", "-s",
        type=parse_seed,
        default=SeedSpec.AUTO,
        help="Root seed: 'auto', 'reuse' or an integer (default: auto)",
    )
    generate_parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output as JSON",
    )
    generate_parser.add_argument(
        "--debug",
        action="store_true",
        default=None,
        help="Log seed generation progress",
    )

    # check
    check_parser = subparsers.add_parser(
        "check",
        help="Validate a pre-generated list of seeds stored as JSON",
    )
    check_parser.add_argument(
        "path",
        help="JSON file holding a list of seeds",
    )
    check_parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output as JSON",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Setup logging
    level = logging.DEBUG if args.verbose or getattr(args, "debug", None) else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.command == "generate":
        return handle_generate(args)
    elif args.command == "check":
        return handle_check(args)
    else:
        parser.print_help()
        return 0


def _batch_dict(seeds: list) -> dict[str, Any]:
    return {
        "count": len(seeds),
        "fingerprint": batch_fingerprint(seeds),
        "seeds": [[int(v) for v in seed] for seed in seeds],
    }


def handle_generate(args: argparse.Namespace) -> int:
    """Handle the generate command."""
    try:
        seeds = generate(args.count, args.seed, debug=args.debug)
    except SeedError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json_output:
        print(json.dumps(_batch_dict(seeds), indent=2))
    else:
        display_seeds(seeds, console=Console())
    return 0


def handle_check(args: argparse.Namespace) -> int:
    """Handle the check command."""
    path = Path(args.path)
    try:
        with open(path) as f:
            seeds = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: cannot read {path}: {e}", file=sys.stderr)
        return 1

    if not isinstance(seeds, list):
        print(f"Error: {path} must hold a JSON list of seeds", file=sys.stderr)
        return 1

    try:
        generate(len(seeds), seeds)
    except SeedError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json_output:
        data = _batch_dict(seeds)
        data["valid"] = True
        print(json.dumps(data, indent=2))
    else:
        print(f"OK: {len(seeds)} seeds, fingerprint {batch_fingerprint(seeds)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
