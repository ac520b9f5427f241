"""
CLI script to bulk-load books into the catalog from a JSON file.

The file holds a list of book objects with the same fields as the
add-book form (camelCase ``coverImage``/``pdfUrl`` are accepted too).

Usage:
    python scripts/import_books.py books.json
    python scripts/import_books.py books.json --reset
    python scripts/import_books.py books.json --config path/to/config.json
"""

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from bookshelf.core import get_config, get_logger, ConfigurationError, ValidationError, DatabaseError
from bookshelf.core.config_loader import reload_config
from bookshelf.database import BookRepository, init_schema, reset_schema


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Import books into the Bookshelf catalog"
    )

    parser.add_argument(
        "file",
        type=str,
        help="JSON file containing a list of books"
    )

    parser.add_argument(
        "--reset",
        action="store_true",
        help="Delete every existing book before importing"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to custom config.json file"
    )

    return parser.parse_args()


def load_records(path: Path) -> list:
    """Read the list of book records from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get("books", [])

    if not isinstance(data, list):
        raise ValueError("Expected a list of books")

    return data


def main():
    """Main entry point for the import CLI."""
    args = parse_args()

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}")
            sys.exit(1)
        reload_config(config_path)

    try:
        config = get_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}")
        sys.exit(1)

    logger = get_logger(__name__)

    source = Path(args.file)
    try:
        records = load_records(source)
    except (OSError, ValueError) as e:
        print(f"Error: Could not read {source}: {e}")
        sys.exit(1)

    print("=" * 60)
    print("Bookshelf - Import")
    print("=" * 60)
    print(f"Source file:       {source}")
    print(f"Database path:     {config.paths.database_path}")
    print(f"Books in file:     {len(records):,}")
    print(f"Reset mode:        {args.reset}")
    print("=" * 60)

    if args.reset:
        response = input("This will DELETE all existing books. Continue? [y/N] ")
        if response.lower() != "y":
            print("Aborted.")
            sys.exit(0)
        reset_schema()
    else:
        init_schema()

    repository = BookRepository()

    try:
        inserted = repository.create_batch(records)
    except ValidationError as e:
        print(f"Invalid book: {e.message}")
        sys.exit(1)
    except DatabaseError as e:
        print(f"Database error: {e.message}")
        sys.exit(1)

    logger.info(f"Imported {inserted} books from {source}")

    print(f"Books imported:    {inserted:,}")
    print(f"Books in catalog:  {repository.count():,}")
    print("=" * 60)

    sys.exit(0)


if __name__ == "__main__":
    main()
