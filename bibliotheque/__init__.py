"""Library management on SQLite: books, members, renewals, loans, history, subscriptions and a command line."""

__version__ = "0.1.0"