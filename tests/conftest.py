"""
Pytest fixtures and configuration for the test suite.

Provides temporary directories, sample books, and mock configurations
to ensure tests are isolated and safe.
"""

import json
import pytest
import tempfile
import shutil
from pathlib import Path
from typing import Generator, List, Dict

import sys
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to temporary directory, cleaned up after test.
    """
    tmp = tempfile.mkdtemp(prefix="bookshelf_test_")
    yield Path(tmp)
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def temp_config(temp_dir: Path) -> Generator[Path, None, None]:
    """
    Create a temporary config.json for testing.

    Args:
        temp_dir: Temporary directory fixture.

    Yields:
        Path to temporary config file.
    """
    config_dir = temp_dir / "config"
    config_dir.mkdir()

    output_dir = temp_dir / "output"
    output_dir.mkdir()

    logs_dir = output_dir / "logs"
    logs_dir.mkdir()

    config_data = {
        "paths": {
            "database_path": str(output_dir / "test.db"),
            "logs_directory": str(logs_dir)
        },
        "search": {
            "max_results": 20,
            "fields": ["title", "author"],
            "escape_literal": True
        },
        "catalog": {
            "default_category": "General",
            "required_fields": ["title", "author", "description", "cover_image", "pdf_url"]
        },
        "relay": {
            "timeout_seconds": 5,
            "verify_ssl": False,
            "chunk_size": 4,
            "default_content_type": "application/pdf"
        },
        "gui": {
            "page_title": "Test Bookshelf",
            "books_per_row": 3,
            "reader_height": 600
        },
        "logging": {
            "level": "DEBUG",
            "format": "%(levelname)s - %(message)s",
            "max_file_size_mb": 1,
            "backup_count": 1
        }
    }

    config_path = config_dir / "config.json"
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config_data, f)

    yield config_path


def make_book(title: str, author: str = "Unknown", **overrides) -> Dict:
    """Build a complete book record for tests."""
    record = {
        "title": title,
        "author": author,
        "description": f"About {title}",
        "cover_image": "https://example.com/cover.jpg",
        "pdf_url": "https://example.com/book.pdf",
    }
    record.update(overrides)
    return record


@pytest.fixture
def book_factory():
    """
    Factory building complete book records.

    Returns:
        The make_book function.
    """
    return make_book


@pytest.fixture
def sample_books() -> List[Dict]:
    """
    A small mixed Bengali/Latin catalog.

    Returns:
        List of book records accepted by BookRepository.create().
    """
    return [
        make_book("আরণ্যক", "বিভূতিভূষণ বন্দ্যোপাধ্যায়"),
        make_book("গীতাঞ্জলি", "রবীন্দ্রনাথ ঠাকুর"),
        make_book("The Hobbit", "J. R. R. Tolkien", category="Fantasy"),
        make_book("কবিতা", "জীবনানন্দ দাশ"),
        make_book("Gitanjali", "Rabindranath Tagore"),
    ]


@pytest.fixture
def temp_database(temp_dir: Path) -> Path:
    """
    Create path for a temporary database.

    Args:
        temp_dir: Temporary directory fixture.

    Returns:
        Path where test database should be created.
    """
    return temp_dir / "test.db"


@pytest.fixture
def reset_config_singleton():
    """
    Reset the config singleton between tests.

    This ensures each test gets a fresh config instance.
    """
    from bookshelf.core import config_loader
    config_loader._config_instance = None
    yield
    config_loader._config_instance = None


@pytest.fixture
def reset_logger_singleton():
    """
    Reset the logger initialization flag between tests.
    """
    import logging
    from bookshelf.core import logger

    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    logger._logger_initialized = False
    yield
    logger._logger_initialized = False

    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    for name in list(logging.root.manager.loggerDict):
        if name.startswith("bookshelf"):
            logging.getLogger(name).setLevel(logging.NOTSET)


@pytest.fixture
def reset_db_singleton():
    """
    Reset the database manager singleton between tests.
    """
    from bookshelf.database import connection
    connection._db_manager = None
    yield
    connection._db_manager = None


@pytest.fixture
def configured_db(temp_config, reset_config_singleton, reset_db_singleton):
    """
    Set up a fully configured database using temp config.

    This fixture initializes config with temp paths and resets
    both config and db singletons, ready for schema operations.
    """
    from bookshelf.core.config_loader import get_config
    get_config(temp_config)
    yield
    # Cleanup happens via reset fixtures


@pytest.fixture
def populated_db(configured_db, sample_books):
    """
    A configured database holding the sample books.

    Returns:
        The BookRepository used to insert them.
    """
    from bookshelf.database import init_schema, BookRepository

    init_schema()
    repository = BookRepository()
    repository.create_batch(sample_books)
    return repository
