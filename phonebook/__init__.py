"""Phonebook: named phone-number lists stored as JSON in a GitHub repository."""

__version__ = "1.0.0"
