"""Semicolon-separated import and export of the book catalogue."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, Union

from .catalog import Book, import_book
from .database import Database, LibraryError

HEADER = "Date_insertion;Titre;Auteur;genre;Edition;Proprietes;Cote;Armoire;Quantite"
SEPARATOR = ";"
COLUMNS = 9

PathLike = Union[str, Path]


class CsvFormatError(LibraryError):
    """Raised when a line of a catalogue file does not have nine fields."""

    def __init__(self, line_number: int, line: str, found: int) -> None:
        super().__init__(
            f"Format CSV incorrect à la ligne {line_number}: {line} "
            f"(attendu: {COLUMNS} colonnes, obtenu: {found})"
        )
        self.line_number = line_number
        self.line = line
        self.found = found


def _quantity(text: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        return 0


def parse_row(line: str, line_number: int = 1) -> Book:
    """Turn one line of a catalogue file into a book."""
    values = line.split(SEPARATOR)
    if len(values) != COLUMNS:
        raise CsvFormatError(line_number, line, len(values))
    date_text, title, author, genre, publisher, properties, identifier, cabinet, quantity = values
    return Book(
        identifier=identifier.strip(),
        title=title.strip(),
        author=author.strip(),
        genre=genre.strip(),
        publisher=publisher.strip(),
        properties=properties.strip(),
        quantity=_quantity(quantity),
        cabinet=cabinet.strip(),
        date_inserted=date_text.strip(),
    )


def read_books(lines: Iterable[str]) -> Iterator[Book]:
    """Yield a book for each line; the export header line is skipped."""
    for number, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if line == HEADER:
            continue
        yield parse_row(line, number)


def format_row(book: Book) -> str:
    """Render a book as one line of a catalogue file, without line end."""
    return SEPARATOR.join(
        (
            book.date_inserted,
            book.title,
            book.author,
            book.genre,
            book.publisher,
            book.properties,
            book.identifier,
            book.cabinet,
            str(book.quantity),
        )
    )


def import_csv(db: Database, path: PathLike) -> int:
    """Import every book of the file, ignoring known identifiers.

    Lines before a malformed one stay imported. Returns the number of book
    lines read.
    """
    try:
        handle = open(path, encoding="utf-8", newline="")
    except OSError as exc:
        raise LibraryError(f"Impossible d'ouvrir le fichier: {exc}") from exc
    count = 0
    with handle:
        for book in read_books(handle):
            import_book(db, book)
            count += 1
    return count


def export_csv(books: Iterable[Book], path: PathLike) -> int:
    """Write the books, after a header line, to ``path``; return how many."""
    count = 0
    try:
        with open(path, "w", encoding="utf-8", newline="") as handle:
            handle.write(HEADER + "\n")
            for book in books:
                handle.write(format_row(book) + "\n")
                count += 1
    except OSError as exc:
        raise LibraryError(f"Impossible d'enregistrer le fichier: {exc}") from exc
    return count