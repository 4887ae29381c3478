"""Loan returns and the history of finished loans."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from .database import Database, LibraryError
from .loans import UNKNOWN_TITLE

_COLUMNS = "id, id_emprunt, emprunteur, livre, debut, fin, date_suppression"


@dataclass
class HistoryEntry:
    """A finished loan kept for the record; ``book`` is the title lent."""

    id: int | None
    loan_id: str
    borrower: str
    book: str
    start: str
    end: str
    date_removed: str


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _entry(row: Any) -> HistoryEntry:
    return HistoryEntry(
        id=row["id"],
        loan_id=_text(row["id_emprunt"]),
        borrower=_text(row["emprunteur"]),
        book=_text(row["livre"]),
        start=_text(row["debut"]),
        end=_text(row["fin"]),
        date_removed=_text(row["date_suppression"]),
    )


def return_loan(db: Database, loan_id: int, today: date) -> HistoryEntry:
    """Close a loan: move it to the history, put the copy back, give the token back.

    The return date is recorded in ISO form (``yyyy-MM-dd``).
    """
    with db.transaction():
        rows = db.query(
            "SELECT id, id_livres, debut, fin, emprunteur FROM emprunt WHERE id = ?",
            (loan_id,),
        )
        if not rows:
            raise LibraryError(f"Emprunt introuvable: {loan_id}")
        loan = rows[0]
        titles = db.query(
            "SELECT titre FROM livres WHERE identifiant = ?", (_text(loan["id_livres"]),)
        )
        title = _text(titles[0]["titre"]) if titles else UNKNOWN_TITLE
        borrower = _text(loan["emprunteur"])
        entry = HistoryEntry(
            id=None,
            loan_id=_text(loan["id"]),
            borrower=borrower,
            book=title,
            start=_text(loan["debut"]),
            end=_text(loan["fin"]),
            date_removed=today.isoformat(),
        )
        try:
            cursor = db.execute(
                f"INSERT INTO historique_emprunt ({_COLUMNS.removeprefix('id, ')}) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (
                    entry.loan_id,
                    entry.borrower,
                    entry.book,
                    entry.start,
                    entry.end,
                    entry.date_removed,
                ),
            )
        except LibraryError as exc:
            raise LibraryError(
                f"Erreur lors de l'insertion dans l'historique: {exc}"
            ) from exc
        entry.id = cursor.lastrowid
        try:
            db.execute("DELETE FROM emprunt WHERE id = ?", (loan_id,))
        except LibraryError as exc:
            raise LibraryError(f"Erreur lors de la suppression: {exc}") from exc
        try:
            db.execute(
                "UPDATE livres SET quantite = quantite + 1 WHERE titre = ?", (title,)
            )
        except LibraryError as exc:
            raise LibraryError(
                f"Erreur lors de la mise à jour de la quantité du livre: {exc}"
            ) from exc
        try:
            db.execute(
                "UPDATE membres SET jetons = jetons + 1 WHERE prenoms = ?", (borrower,)
            )
        except LibraryError as exc:
            raise LibraryError(
                f"Erreur lors de la mise à jour des jetons {exc}"
            ) from exc
    return entry


def list_history(db: Database) -> list[HistoryEntry]:
    """Every finished loan, oldest first."""
    rows = db.query(f"SELECT {_COLUMNS} FROM historique_emprunt ORDER BY rowid")
    return [_entry(row) for row in rows]


def search_history(db: Database, text: str) -> list[HistoryEntry]:
    """Finished loans whose borrower contains ``text``."""
    rows = db.query(
        f"SELECT {_COLUMNS} FROM historique_emprunt WHERE emprunteur LIKE ? ORDER BY rowid",
        (f"%{text}%",),
    )
    return [_entry(row) for row in rows]


def clear_history(db: Database) -> int:
    """Delete the whole history; return how many entries were removed."""
    try:
        cursor = db.execute("DELETE FROM historique_emprunt")
    except LibraryError as exc:
        raise LibraryError(f"Erreur lors de la suppression des données: {exc}") from exc
    return cursor.rowcount