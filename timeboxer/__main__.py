"""Entry point for running timeboxer directly.

Usage: python -m timeboxer run --config ~/.timeboxer/timeboxer.toml
"""

from timeboxer.cli import main_entry

if __name__ == "__main__":
    main_entry()
