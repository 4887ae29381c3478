"""SQLite storage shared by every part of the library application."""

from __future__ import annotations

import re
import sqlite3
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Any, Iterator, Mapping, Sequence, Union

Params = Union[Sequence[Any], Mapping[str, Any]]

_SCHEMA = """
CREATE TABLE IF NOT EXISTS livres (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    titre TEXT NOT NULL,
    genre TEXT,
    auteur TEXT,
    maison_edition TEXT,
    proprietes TEXT,
    quantite INTEGER NOT NULL DEFAULT 0,
    armoire TEXT,
    identifiant TEXT NOT NULL UNIQUE,
    date_insertion TEXT
);
CREATE TABLE IF NOT EXISTS armoires (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    armoire TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS genres (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    genre TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS membres (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    nom TEXT NOT NULL,
    prenoms TEXT NOT NULL,
    statut TEXT,
    sexe TEXT,
    debut TEXT,
    fin TEXT,
    contact TEXT,
    jetons INTEGER NOT NULL DEFAULT 3,
    montant INTEGER NOT NULL DEFAULT 0
);
CREATE TABLE IF NOT EXISTS statut_montants (
    statut TEXT PRIMARY KEY,
    montant INTEGER NOT NULL DEFAULT 0
);
CREATE TABLE IF NOT EXISTS emprunt (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    id_membres INTEGER,
    id_livres TEXT,
    debut TEXT,
    fin TEXT,
    emprunteur TEXT
);
CREATE TABLE IF NOT EXISTS historique_emprunt (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    id_emprunt TEXT,
    emprunteur TEXT,
    livre TEXT,
    debut TEXT,
    fin TEXT,
    date_suppression TEXT
);
CREATE TABLE IF NOT EXISTS abonnement (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    membres TEXT,
    montants INTEGER NOT NULL DEFAULT 0,
    date_paiement TEXT
);
"""

_STATUSES = ("Adulte", "Enfant")
_DATE_RE = re.compile(r"(\d{2})-(\d{2})-(\d{4})")


class LibraryError(Exception):
    """Raised when a library operation cannot be carried out."""


def format_date(value: date) -> str:
    """Render a date as ``dd-MM-yyyy``, the format stored in the database."""
    return f"{value.day:02d}-{value.month:02d}-{value.year:04d}"


def parse_date(text: str | None) -> date | None:
    """Parse a ``dd-MM-yyyy`` string; return None when it is not a valid date."""
    if not text:
        return None
    match = _DATE_RE.fullmatch(text.strip())
    if match is None:
        return None
    day, month, year = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


class Database:
    """A connection to the library database, with its schema in place."""

    def __init__(self, path: Union[str, Path] = ":memory:") -> None:
        self.path = str(path)
        try:
            self._conn = sqlite3.connect(self.path, isolation_level=None)
        except sqlite3.Error as exc:
            raise LibraryError(f"cannot open database {self.path}: {exc}") from exc
        self._conn.row_factory = sqlite3.Row
        self._depth = 0
        try:
            self._conn.executescript(_SCHEMA)
            self._conn.executemany(
                "INSERT OR IGNORE INTO statut_montants (statut, montant) VALUES (?, 0)",
                [(status,) for status in _STATUSES],
            )
        except sqlite3.Error as exc:
            self._conn.close()
            raise LibraryError(f"cannot prepare database {self.path}: {exc}") from exc

    def close(self) -> None:
        """Close the connection."""
        self._conn.close()

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    @contextmanager
    def transaction(self) -> Iterator["Database"]:
        """Group statements: commit on success, roll back on any exception."""
        savepoint = f"sp{self._depth}"
        try:
            if self._depth == 0:
                self._conn.execute("BEGIN")
            else:
                self._conn.execute(f"SAVEPOINT {savepoint}")
        except sqlite3.Error as exc:
            raise LibraryError(str(exc)) from exc
        self._depth += 1
        try:
            yield self
        except BaseException:
            self._depth -= 1
            if self._depth == 0:
                self._conn.execute("ROLLBACK")
            else:
                self._conn.execute(f"ROLLBACK TO {savepoint}")
                self._conn.execute(f"RELEASE {savepoint}")
            raise
        self._depth -= 1
        try:
            if self._depth == 0:
                self._conn.execute("COMMIT")
            else:
                self._conn.execute(f"RELEASE {savepoint}")
        except sqlite3.Error as exc:
            raise LibraryError(str(exc)) from exc

    def execute(self, sql: str, params: Params = ()) -> sqlite3.Cursor:
        """Run one statement and return its cursor."""
        try:
            return self._conn.execute(sql, params)
        except sqlite3.Error as exc:
            raise LibraryError(str(exc)) from exc

    def query(self, sql: str, params: Params = ()) -> list[sqlite3.Row]:
        """Run a query and return every row it yields."""
        try:
            return self._conn.execute(sql, params).fetchall()
        except sqlite3.Error as exc:
            raise LibraryError(str(exc)) from exc