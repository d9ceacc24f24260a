"""Python client for the Phonebook API."""

from phonebook.client.client import PhonebookClient, PhonebookClientError

__all__ = ["PhonebookClient", "PhonebookClientError"]
