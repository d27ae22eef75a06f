"""Entry point for python -m cardforge

Usage:
  python -m cardforge generate card.svg cards.csv --out-dir output
  python -m cardforge layout "## Title\nHello **world**"
"""

from cardforge.cli import cli


if __name__ == "__main__":
    cli()
