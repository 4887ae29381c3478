"""Editing the details of books already in the catalogue."""

from __future__ import annotations

from .catalog import Book
from .database import Database, LibraryError


def update_book(db: Database, old_title: str, book: Book) -> int:
    """Overwrite the details of every book titled ``old_title``.

    The identifier and insertion date are left untouched. Returns the number
    of books changed.
    """
    try:
        cursor = db.execute(
            "UPDATE livres SET titre = ?, genre = ?, auteur = ?, maison_edition = ?, "
            "proprietes = ?, quantite = ?, armoire = ? WHERE titre = ?",
            (
                book.title,
                book.genre,
                book.author,
                book.publisher,
                book.properties,
                book.quantity,
                book.cabinet,
                old_title,
            ),
        )
    except LibraryError as exc:
        raise LibraryError(
            f"Échec de la modification des informations du livre: {exc}"
        ) from exc
    return cursor.rowcount