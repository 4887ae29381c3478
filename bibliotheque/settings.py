"""Library settings: cabinets, genres, membership fees and a full reset."""

from __future__ import annotations

from typing import Union

from .database import Database, LibraryError

ADULT = "Adulte"
CHILD = "Enfant"

# Tables that survive a reset: the accounts and the fee schedule.
_KEPT_TABLES = frozenset({"login", "statut_montants"})

Fee = Union[int, str]


def add_cabinet(db: Database, name: str) -> None:
    """Record a new cabinet (armoire) where books can be shelved."""
    if not name:
        raise LibraryError("Veuillez entrer un nom d'armoire.")
    try:
        db.execute("INSERT INTO armoires (armoire) VALUES (?)", (name,))
    except LibraryError as exc:
        raise LibraryError(f"Erreur lors de l'ajout de l'armoire: {exc}") from exc


def add_genre(db: Database, name: str) -> None:
    """Record a new book genre."""
    if not name:
        raise LibraryError("Veuillez entrer un genre.")
    try:
        db.execute("INSERT INTO genres (genre) VALUES (?)", (name,))
    except LibraryError as exc:
        raise LibraryError(f"Erreur lors de l'ajout du genre: {exc}") from exc


def save_parameters(db: Database, cabinet: str = "", genre: str = "") -> None:
    """Add a cabinet and/or a genre; at least one of them must be given."""
    if not cabinet and not genre:
        raise LibraryError(
            "Veuillez entrer des données pour l'armoire et/ou le genre."
        )
    if cabinet:
        add_cabinet(db, cabinet)
    if genre:
        add_genre(db, genre)


def list_cabinets(db: Database) -> list[str]:
    """Every cabinet, in the order they were added."""
    rows = db.query("SELECT armoire FROM armoires ORDER BY rowid")
    return ["" if row["armoire"] is None else str(row["armoire"]) for row in rows]


def list_genres(db: Database) -> list[str]:
    """Every genre, in the order they were added."""
    rows = db.query("SELECT genre FROM genres ORDER BY rowid")
    return ["" if row["genre"] is None else str(row["genre"]) for row in rows]


def _fee_value(value: Fee, label: str) -> int:
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise LibraryError("Veuillez remplir les champs vide")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise LibraryError(f"Montant invalide pour les {label}: {value!r}") from exc


def set_fees(db: Database, adult: Fee, child: Fee) -> None:
    """Set the membership fee for adults and for children."""
    adult_fee = _fee_value(adult, "adultes")
    child_fee = _fee_value(child, "enfants")
    with db.transaction():
        for status, fee, label in (
            (ADULT, adult_fee, "adultes"),
            (CHILD, child_fee, "enfants"),
        ):
            try:
                db.execute(
                    "UPDATE statut_montants SET montant = ? WHERE statut = ?",
                    (fee, status),
                )
            except LibraryError as exc:
                raise LibraryError(
                    f"Erreur lors de la mise à jour du montant pour les {label} : {exc}"
                ) from exc


def get_fee(db: Database, status: str) -> int:
    """The membership fee for ``status``."""
    rows = db.query("SELECT montant FROM statut_montants WHERE statut = ?", (status,))
    if not rows:
        raise LibraryError("Aucun montant trouvé pour ce statut.")
    try:
        return int(rows[0]["montant"])
    except (TypeError, ValueError):
        return 0


def reset(db: Database) -> list[str]:
    """Delete the data of every table except accounts and fees.

    Autoincrement counters start again from one. Returns the names of the
    tables that were emptied.
    """
    cleared: list[str] = []
    db.execute("PRAGMA foreign_keys = OFF")
    try:
        with db.transaction():
            tables = [
                str(row["name"])
                for row in db.query(
                    "SELECT name FROM sqlite_master "
                    "WHERE type='table' AND name NOT LIKE 'sqlite_%'"
                )
            ]
            for table in tables:
                if table in _KEPT_TABLES:
                    continue
                quoted = table.replace('"', '""')
                db.execute(f'DELETE FROM "{quoted}"')
                cleared.append(table)
            has_sequence = db.query(
                "SELECT 1 FROM sqlite_master WHERE type='table' AND name='sqlite_sequence'"
            )
            if has_sequence:
                db.execute("DELETE FROM sqlite_sequence")
    finally:
        db.execute("PRAGMA foreign_keys = ON")
    return cleared