"""
CLI script to launch the Bookshelf Streamlit interface.

Usage:
    python scripts/run_app.py                              # Default port 8501
    python scripts/run_app.py --port 8502                  # Custom port
    python scripts/run_app.py --config path/to/config.json # Custom config
"""

import argparse
import os
import subprocess
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from bookshelf.core import get_config, ConfigurationError
from bookshelf.core.config_loader import CONFIG_ENV_VAR, reload_config
from bookshelf.database import init_schema


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Launch the Bookshelf web interface"
    )

    parser.add_argument(
        "--port",
        type=int,
        default=8501,
        help="Port to run the application on (default: 8501)"
    )

    parser.add_argument(
        "--host",
        type=str,
        default="localhost",
        help="Host to bind to (default: localhost)"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to custom config.json file"
    )

    parser.add_argument(
        "--no-browser",
        action="store_true",
        help="Don't open browser automatically"
    )

    return parser.parse_args()


def main():
    """Check the configuration, prepare the database and start Streamlit."""
    args = parse_args()

    project_root = Path(__file__).parent.parent
    app_path = project_root / "bookshelf" / "gui" / "app.py"

    if not app_path.exists():
        print(f"Error: Application file not found: {app_path}")
        sys.exit(1)

    env = os.environ.copy()

    try:
        if args.config:
            config_path = Path(args.config).resolve()
            config = reload_config(config_path)
            env[CONFIG_ENV_VAR] = str(config_path)
        else:
            config = get_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}")
        sys.exit(1)

    init_schema()

    print("=" * 60)
    print(f"{config.gui.page_title} - Web Interface")
    print("=" * 60)
    print(f"Database path:     {config.paths.database_path}")
    print(f"Starting server on http://{args.host}:{args.port}")
    print("Press Ctrl+C to stop")
    print("=" * 60)

    cmd = [
        sys.executable, "-m", "streamlit", "run",
        str(app_path),
        "--server.port", str(args.port),
        "--server.address", args.host,
    ]

    if args.no_browser:
        cmd.extend(["--server.headless", "true"])

    try:
        subprocess.run(cmd, cwd=str(project_root), env=env)
    except KeyboardInterrupt:
        print("\nShutting down...")
    except FileNotFoundError:
        print("Error: Streamlit not found. Install with: pip install streamlit")
        sys.exit(1)


if __name__ == "__main__":
    main()
