"""The book catalogue: adding, listing, searching and removing books."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Any

from .database import Database, LibraryError, format_date

ALL = "Tous"

_COLUMNS = (
    "titre, genre, auteur, maison_edition, proprietes, quantite, "
    "armoire, identifiant, date_insertion"
)
_SEARCHED = (
    "titre",
    "genre",
    "auteur",
    "maison_edition",
    "proprietes",
    "armoire",
    "identifiant",
    "date_insertion",
)


@dataclass
class Book:
    """One catalogue entry; ``identifier`` is the book's shelf mark."""

    identifier: str
    title: str
    author: str
    genre: str = ""
    publisher: str = ""
    properties: str = ""
    quantity: int = 0
    cabinet: str = ""
    date_inserted: str = ""

    def available(self) -> bool:
        """True while at least one copy is on the shelf."""
        return self.quantity > 0

    def _values(self) -> tuple[Any, ...]:
        return (
            self.title,
            self.genre,
            self.author,
            self.publisher,
            self.properties,
            self.quantity,
            self.cabinet,
            self.identifier,
            self.date_inserted,
        )


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _book(row: Any) -> Book:
    return Book(
        identifier=_text(row["identifiant"]),
        title=_text(row["titre"]),
        author=_text(row["auteur"]),
        genre=_text(row["genre"]),
        publisher=_text(row["maison_edition"]),
        properties=_text(row["proprietes"]),
        quantity=_int(row["quantite"]),
        cabinet=_text(row["armoire"]),
        date_inserted=_text(row["date_insertion"]),
    )


def add_book(db: Database, book: Book, today: date) -> Book:
    """Insert a new book dated ``today``; title, author and identifier are required."""
    if not book.title or not book.author or not book.identifier:
        raise LibraryError("Veuillez remplir tous les champs obligatoires.")
    stored = replace(book, date_inserted=format_date(today))
    try:
        db.execute(
            f"INSERT INTO livres ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
            stored._values(),
        )
    except LibraryError as exc:
        raise LibraryError(f"Erreur lors de l'ajout du livre: {exc}") from exc
    return stored


def import_book(db: Database, book: Book) -> bool:
    """Insert a book as it is, ignoring it if its identifier exists; True if stored."""
    cursor = db.execute(
        f"INSERT OR IGNORE INTO livres ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
        book._values(),
    )
    return cursor.rowcount > 0


def list_books(db: Database) -> list[Book]:
    """Every book in the catalogue."""
    return [_book(row) for row in db.query(f"SELECT {_COLUMNS} FROM livres ORDER BY rowid")]


def search_books(db: Database, text: str) -> list[Book]:
    """Books where any text field contains ``text``."""
    condition = " OR ".join(f"{column} LIKE :pattern" for column in _SEARCHED)
    rows = db.query(
        f"SELECT {_COLUMNS} FROM livres WHERE {condition} ORDER BY rowid",
        {"pattern": f"%{text}%"},
    )
    return [_book(row) for row in rows]


def _filter(db: Database, column: str, value: str) -> list[Book]:
    if value == ALL:
        return list_books(db)
    rows = db.query(
        f"SELECT {_COLUMNS} FROM livres WHERE {column} = ? ORDER BY rowid", (value,)
    )
    return [_book(row) for row in rows]


def filter_by_cabinet(db: Database, cabinet: str) -> list[Book]:
    """Books kept in ``cabinet``; ``"Tous"`` selects every book."""
    return _filter(db, "armoire", cabinet)


def filter_by_genre(db: Database, genre: str) -> list[Book]:
    """Books of ``genre``; ``"Tous"`` selects every book."""
    return _filter(db, "genre", genre)


def delete_book(db: Database, identifier: str) -> bool:
    """Remove the book with this identifier; True if one was removed."""
    cursor = db.execute("DELETE FROM livres WHERE identifiant = ?", (identifier,))
    return cursor.rowcount > 0


def available_titles(db: Database, text: str | None = None) -> list[str]:
    """Titles offered for loans.

    Without ``text``, the titles of books with copies on the shelf; with it,
    every title containing ``text``.
    """
    if text is None:
        rows = db.query("SELECT titre FROM livres WHERE quantite > 0 ORDER BY rowid")
    else:
        rows = db.query(
            "SELECT titre FROM livres WHERE titre LIKE ? ORDER BY rowid", (f"%{text}%",)
        )
    return [_text(row["titre"]) for row in rows]