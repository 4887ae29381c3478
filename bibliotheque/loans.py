"""Book loans: lending a copy to a member and listing current loans."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from .database import Database, LibraryError, format_date, parse_date

UNKNOWN_TITLE = "Inconnu"


@dataclass
class Loan:
    """One current loan; ``book_id`` is the book's identifier, dates are ``dd-MM-yyyy``."""

    id: int | None
    book_id: str
    start: str
    end: str
    borrower: str
    title: str = UNKNOWN_TITLE

    def is_valid(self, today: date) -> bool:
        """True when the return date is a valid date not before ``today``."""
        end = parse_date(self.end)
        return end is not None and today <= end


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _title(db: Database, book_id: str) -> str:
    rows = db.query("SELECT titre FROM livres WHERE identifiant = ?", (book_id,))
    return _text(rows[0]["titre"]) if rows else UNKNOWN_TITLE


def _loans(db: Database, rows: list[Any]) -> list[Loan]:
    return [
        Loan(
            id=row["id"],
            book_id=_text(row["id_livres"]),
            start=_text(row["debut"]),
            end=_text(row["fin"]),
            borrower=_text(row["emprunteur"]),
            title=_title(db, _text(row["id_livres"])),
        )
        for row in rows
    ]


def create_loan(db: Database, first_name: str, title: str, start: date, end: date) -> Loan:
    """Lend the book titled ``title`` to the member with these first names.

    The member spends one token and the book loses one copy on the shelf.
    """
    with db.transaction():
        members = db.query(
            "SELECT id, jetons FROM membres WHERE prenoms = ? ORDER BY rowid",
            (first_name,),
        )
        if not members:
            raise LibraryError("Membre non trouvé")
        member_id = members[0]["id"]
        if _int(members[0]["jetons"]) == 0:
            raise LibraryError(
                f"Jeton insuffisant pour {first_name}. Veuillez rendre les livres "
                "pour pouvoir faire à nouveau un emprunt."
            )
        books = db.query(
            "SELECT identifiant, quantite FROM livres WHERE titre = ? ORDER BY rowid",
            (title,),
        )
        book_id = _text(books[0]["identifiant"]) if books else ""
        if not book_id:
            raise LibraryError("Livre non trouvé")
        if _int(books[0]["quantite"]) <= 0:
            raise LibraryError("Quantité insuffisante pour emprunter ce livre.")
        loan = Loan(
            id=None,
            book_id=book_id,
            start=format_date(start),
            end=format_date(end),
            borrower=first_name,
            title=title,
        )
        try:
            cursor = db.execute(
                "INSERT INTO emprunt (id_membres, id_livres, debut, fin, emprunteur) "
                "VALUES (?, ?, ?, ?, ?)",
                (member_id, loan.book_id, loan.start, loan.end, loan.borrower),
            )
        except LibraryError as exc:
            raise LibraryError(
                f"Erreur lors de l'enregistrement de l'emprunt: {exc}"
            ) from exc
        loan.id = cursor.lastrowid
        db.execute(
            "UPDATE livres SET quantite = quantite - 1 WHERE identifiant = ?", (book_id,)
        )
        db.execute(
            "UPDATE membres SET jetons = jetons - 1 WHERE prenoms = ?", (first_name,)
        )
    return loan


def list_loans(db: Database) -> list[Loan]:
    """Every current loan, with the title of the book lent."""
    rows = db.query(
        "SELECT id_livres, debut, fin, emprunteur, id FROM emprunt ORDER BY rowid"
    )
    return _loans(db, rows)


def search_loans(db: Database, text: str) -> list[Loan]:
    """Loans whose borrower or return date contains ``text``."""
    rows = db.query(
        "SELECT id_livres, debut, fin, emprunteur, id FROM emprunt "
        "WHERE emprunteur LIKE :pattern OR fin LIKE :pattern ORDER BY rowid",
        {"pattern": f"%{text}%"},
    )
    return _loans(db, rows)