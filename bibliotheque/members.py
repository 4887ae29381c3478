"""Library members: registration, listing, searching and removal."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Union

from .database import Database, LibraryError, format_date, parse_date

DEFAULT_TOKENS = 3

_COLUMNS = "id, nom, prenoms, statut, sexe, debut, fin, contact, jetons, montant"


class Status(str, Enum):
    """Membership category; it decides the fee and the membership length."""

    ADULT = "Adulte"
    CHILD = "Enfant"


class Sex(str, Enum):
    """Sex recorded for a member."""

    MALE = "Homme"
    FEMALE = "Femme"


@dataclass
class Member:
    """One registered member; dates are stored as ``dd-MM-yyyy`` text."""

    last_name: str
    first_name: str
    status: str
    sex: str
    start: str = ""
    end: str = ""
    contact: str = ""
    tokens: int = DEFAULT_TOKENS
    amount: int = 0
    id: int | None = None

    def is_valid(self, today: date) -> bool:
        """True when the membership end is a valid date not before ``today``."""
        end = parse_date(self.end)
        return end is not None and today <= end


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _member(row: Any) -> Member:
    return Member(
        last_name=_text(row["nom"]),
        first_name=_text(row["prenoms"]),
        status=_text(row["statut"]),
        sex=_text(row["sexe"]),
        start=_text(row["debut"]),
        end=_text(row["fin"]),
        contact=_text(row["contact"]),
        tokens=_int(row["jetons"]),
        amount=_int(row["montant"]),
        id=row["id"],
    )


def _enum_value(enum_type: type[Enum], value: Union[str, Enum], label: str) -> str:
    try:
        return enum_type(value).value
    except ValueError as exc:
        raise LibraryError(f"{label} invalide: {value!r}") from exc


def register_member(
    db: Database,
    nom: str,
    prenoms: str,
    statut: Union[Status, str],
    sexe: Union[Sex, str],
    debut: date,
    fin: date,
    contact: str = "",
) -> Member:
    """Register a new member holding the default number of loan tokens."""
    if not nom or not prenoms:
        raise LibraryError("Veuillez remplir les champs")
    member = Member(
        last_name=nom,
        first_name=prenoms,
        status=_enum_value(Status, statut, "Statut"),
        sex=_enum_value(Sex, sexe, "Sexe"),
        start=format_date(debut),
        end=format_date(fin),
        contact=contact or "",
    )
    try:
        cursor = db.execute(
            "INSERT INTO membres (nom, prenoms, statut, sexe, debut, fin, contact, jetons) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            (
                member.last_name,
                member.first_name,
                member.status,
                member.sex,
                member.start,
                member.end,
                member.contact,
                member.tokens,
            ),
        )
    except LibraryError as exc:
        raise LibraryError(f"Erreur lors de l'ajout du membre: {exc}") from exc
    member.id = cursor.lastrowid
    return member


def list_members(db: Database) -> list[Member]:
    """Every member, in registration order."""
    rows = db.query(f"SELECT {_COLUMNS} FROM membres ORDER BY rowid")
    return [_member(row) for row in rows]


def search_members(db: Database, text: str) -> list[Member]:
    """Members whose last name followed by first names contains ``text``."""
    rows = db.query(
        f"SELECT {_COLUMNS} FROM membres WHERE (nom || prenoms) LIKE ? ORDER BY rowid",
        (f"%{text}%",),
    )
    return [_member(row) for row in rows]


def member_first_names(db: Database, text: str | None = None) -> list[str]:
    """First names offered for loans; with ``text``, only those containing it."""
    if text is None:
        rows = db.query("SELECT prenoms FROM membres ORDER BY rowid")
    else:
        rows = db.query(
            "SELECT prenoms FROM membres WHERE prenoms LIKE ? ORDER BY rowid",
            (f"%{text}%",),
        )
    return [_text(row["prenoms"]) for row in rows]


def delete_member(db: Database, first_name: str) -> int:
    """Remove every member with these first names; return how many were removed."""
    try:
        cursor = db.execute("DELETE FROM membres WHERE prenoms = ?", (first_name,))
    except LibraryError as exc:
        raise LibraryError(f"Erreur lors de la suppression: {exc}") from exc
    return cursor.rowcount