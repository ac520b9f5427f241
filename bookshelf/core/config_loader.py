"""
Configuration loader for the Bookshelf catalog.

Loads settings from config.json and provides typed access via dataclasses.
Supports singleton pattern for global access and runtime reload capability.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .exceptions import ConfigurationError


# Overrides the upward search for config/config.json
CONFIG_ENV_VAR = "BOOKSHELF_CONFIG"

DEFAULT_REQUIRED_FIELDS = ["title", "author", "description", "cover_image", "pdf_url"]


@dataclass
class PathsConfig:
    """Configuration for file system paths."""
    database_path: Path
    logs_directory: Path


@dataclass
class SearchConfig:
    """Configuration for catalog search."""
    max_results: int
    fields: List[str]
    escape_literal: bool


@dataclass
class CatalogConfig:
    """Configuration for book records."""
    default_category: str
    required_fields: List[str]


@dataclass
class RelayConfig:
    """Configuration for the remote document relay."""
    timeout_seconds: float
    verify_ssl: bool
    chunk_size: int
    default_content_type: str


@dataclass
class GUIConfig:
    """Configuration for Streamlit web interface."""
    page_title: str
    books_per_row: int
    reader_height: int


@dataclass
class LoggingConfig:
    """Configuration for logging behavior."""
    level: str
    format: str
    max_file_size_mb: int
    backup_count: int
    levels: Dict[str, str] = field(default_factory=dict)


@dataclass
class Config:
    """
    Main configuration container holding all config sections.

    Provides singleton access via get_config() function.
    """
    paths: PathsConfig
    search: SearchConfig
    catalog: CatalogConfig
    relay: RelayConfig
    gui: GUIConfig
    logging: LoggingConfig
    project_root: Path = field(default_factory=Path)

    @classmethod
    def from_file(cls, config_path: Path) -> "Config":
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the config.json file.

        Returns:
            Populated Config instance.

        Raises:
            ConfigurationError: If file is missing or invalid.
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                {"path": str(config_path)}
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in config file: {e}",
                {"path": str(config_path)}
            )

        project_root = config_path.parent.parent

        return cls._parse_config(data, project_root)

    @classmethod
    def _parse_config(cls, data: dict, project_root: Path) -> "Config":
        """Parse raw config dict into typed Config object."""
        paths_data = data.get("paths", {})
        paths = PathsConfig(
            database_path=cls._resolve_path(paths_data.get("database_path", "output/bookshelf.db"), project_root),
            logs_directory=cls._resolve_path(paths_data.get("logs_directory", "output/logs"), project_root)
        )

        search_data = data.get("search", {})
        search = SearchConfig(
            max_results=search_data.get("max_results", 20),
            fields=search_data.get("fields", ["title", "author"]),
            escape_literal=search_data.get("escape_literal", True)
        )

        catalog_data = data.get("catalog", {})
        catalog = CatalogConfig(
            default_category=catalog_data.get("default_category", "General"),
            required_fields=catalog_data.get("required_fields", list(DEFAULT_REQUIRED_FIELDS))
        )

        relay_data = data.get("relay", {})
        relay = RelayConfig(
            timeout_seconds=relay_data.get("timeout_seconds", 30),
            verify_ssl=relay_data.get("verify_ssl", False),
            chunk_size=relay_data.get("chunk_size", 64 * 1024),
            default_content_type=relay_data.get("default_content_type", "application/pdf")
        )

        gui_data = data.get("gui", {})
        gui = GUIConfig(
            page_title=gui_data.get("page_title", "Bookshelf"),
            books_per_row=gui_data.get("books_per_row", 4),
            reader_height=gui_data.get("reader_height", 800)
        )

        log_data = data.get("logging", {})
        logging_cfg = LoggingConfig(
            level=log_data.get("level", "INFO"),
            format=log_data.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            max_file_size_mb=log_data.get("max_file_size_mb", 10),
            backup_count=log_data.get("backup_count", 5),
            levels=log_data.get("levels", {})
        )

        return cls(
            paths=paths,
            search=search,
            catalog=catalog,
            relay=relay,
            gui=gui,
            logging=logging_cfg,
            project_root=project_root
        )

    @staticmethod
    def _resolve_path(path_str: str, project_root: Path) -> Path:
        """Resolve a path string, making relative paths absolute."""
        path = Path(path_str)
        if path.is_absolute():
            return path
        return project_root / path


_config_instance: Optional[Config] = None


def get_config(config_path: Path = None) -> Config:
    """
    Get the singleton Config instance.

    Args:
        config_path: Optional path to config file. If not provided,
                    uses BOOKSHELF_CONFIG or searches upward from
                    current directory.

    Returns:
        The global Config instance.

    Raises:
        ConfigurationError: If config cannot be loaded.
    """
    global _config_instance

    if _config_instance is None or config_path is not None:
        if config_path is None:
            config_path = _find_config_file()
        _config_instance = Config.from_file(config_path)

    return _config_instance


def _find_config_file() -> Path:
    """Locate config.json: BOOKSHELF_CONFIG if set, else search upward from the cwd."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)

    current = Path.cwd()

    for _ in range(10):
        config_path = current / "config" / "config.json"
        if config_path.exists():
            return config_path

        parent = current.parent
        if parent == current:
            break
        current = parent

    raise ConfigurationError(
        "Could not find config/config.json in current directory or parents"
    )


def reload_config(config_path: Path = None) -> Config:
    """
    Force reload of configuration.

    Args:
        config_path: Optional path to config file.

    Returns:
        Fresh Config instance.
    """
    global _config_instance
    _config_instance = None
    return get_config(config_path)


if __name__ == "__main__":
    try:
        config = get_config()
        print(f"Project root: {config.project_root}")
        print(f"Database path: {config.paths.database_path}")
        print(f"Search fields: {config.search.fields}")
        print(f"Max results: {config.search.max_results}")
    except ConfigurationError as e:
        print(f"Config error: {e.message}")
