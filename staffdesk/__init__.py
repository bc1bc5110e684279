"""Terminal employee records manager: storage, validation, sorting, search and paged tables."""

__version__ = "0.1.0"