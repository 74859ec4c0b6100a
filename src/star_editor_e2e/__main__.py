"""Entry point for running the acceptance scenario as a module.

Usage:
    uv run python -m star_editor_e2e
    uv run python -m star_editor_e2e --root path/to/site --headed
"""

from star_editor_e2e.cli import main

if __name__ == "__main__":
    main()
