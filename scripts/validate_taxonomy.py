#!/usr/bin/env python3
"""
Utility script to check a taxonomy seed file before shipping it with the app.

Builds the tree exactly as the app does at startup, reports how many taxa it
holds per rank, and optionally prints an indented outline.

Usage:
    python scripts/validate_taxonomy.py \
        --file assets/data/fungi_taxonomy.json \
        --outline
"""

from __future__ import annotations

import argparse
import pathlib
from collections import Counter
from typing import List, Optional

from backend.taxonomy import TaxonomyError, build_store, walk
from utils.config import DEFAULT_TAXONOMY_FILE
from utils.taxonomy_loader import read_taxon_records


def outline_lines(root) -> List[str]:
    """Indented "Name (Rank)" lines, two spaces per level."""
    return [f"{'  ' * depth}{node.display_name} ({node.rank})" for node, depth in walk(root)]


def rank_counts(root) -> Counter:
    return Counter(node.rank for node, _ in walk(root))


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate a taxonomy seed file.")
    parser.add_argument(
        "--file",
        type=pathlib.Path,
        default=pathlib.Path(DEFAULT_TAXONOMY_FILE),
        help="Seed JSON file to check (default: the bundled fungi taxonomy).",
    )
    parser.add_argument(
        "--outline",
        action="store_true",
        help="Print the full tree as an indented outline.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    data_file: pathlib.Path = args.file

    if not data_file.exists():
        raise SystemExit(f"Taxonomy file does not exist: {data_file}")

    try:
        store = build_store(read_taxon_records(data_file))
    except TaxonomyError as e:
        print(f"{data_file}: {type(e).__name__}: {e}")
        return 1

    root = store.get_root()
    print(f"{data_file}: {store.count()} taxa under {root.name} ({root.rank})")
    for rank, count in rank_counts(root).items():
        print(f"  {rank}: {count}")

    if args.outline:
        print("\n".join(outline_lines(root)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
