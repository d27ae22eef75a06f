"""Card generation from CSV records."""

from cardforge.cards.generator import CardGenerator
from cardforge.cards.records import Record, parse_records, read_records

__all__ = [
    # generator.py
    "CardGenerator",
    # records.py
    "Record",
    "parse_records",
    "read_records",
]
