"""
Entry point for running Frenglish as a module.

Usage:
    python -m frenglish --help
    python -m frenglish translate --path locales
    python -m frenglish upload --path locales
"""
from .cli import app


if __name__ == "__main__":
    app()
