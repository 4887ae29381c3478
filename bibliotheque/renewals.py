"""Membership renewals: new dates, fee collection and the payment record."""

from __future__ import annotations

import calendar
from datetime import date
from typing import Any, Union

from .database import Database, LibraryError, format_date
from .members import Member, Status, list_members
from .settings import get_fee

# Months of membership bought by one renewal, per status.
_DURATION_MONTHS = {Status.ADULT: 12, Status.CHILD: 3}


def _add_months(start: date, months: int) -> date:
    total = start.month - 1 + months
    year = start.year + total // 12
    month = total % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def _status(status: Union[Status, str]) -> Status:
    try:
        return Status(status)
    except ValueError as exc:
        raise LibraryError(f"Statut invalide: {status!r}") from exc


def _int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def membership_end(status: Union[Status, str], start: date) -> date:
    """End of a membership starting on ``start``: one year for adults, three months for children.

    A day that does not exist in the target month falls back to that month's last day.
    """
    return _add_months(start, _DURATION_MONTHS[_status(status)])


def renew_membership(
    db: Database, first_name: str, status: Union[Status, str], today: date
) -> Member:
    """Renew the membership of the members with these first names and status.

    The membership runs from ``today``, the status fee is added to the amount
    paid so far, and the payment is recorded as a subscription. Returns the
    renewed member.
    """
    kind = _status(status)
    end = membership_end(kind, today)
    fee = get_fee(db, kind.value)
    with db.transaction():
        rows = db.query(
            "SELECT id, nom, montant FROM membres "
            "WHERE prenoms = ? AND statut = ? ORDER BY rowid",
            (first_name, kind.value),
        )
        if not rows:
            raise LibraryError("Erreur lors de la récupération du montant actuel.")
        member_id = rows[0]["id"]
        last_name = "" if rows[0]["nom"] is None else str(rows[0]["nom"])
        new_amount = _int(rows[0]["montant"]) + fee
        try:
            db.execute(
                "UPDATE membres SET montant = ? WHERE prenoms = ? AND statut = ?",
                (new_amount, first_name, kind.value),
            )
        except LibraryError as exc:
            raise LibraryError(
                f"Erreur lors de la mise à jour du montant: {exc}"
            ) from exc
        try:
            db.execute(
                "UPDATE membres SET debut = ?, fin = ? WHERE prenoms = ? AND statut = ?",
                (format_date(today), format_date(end), first_name, kind.value),
            )
        except LibraryError as exc:
            raise LibraryError(
                f"Erreur lors de la mise à jour des dates: {exc}"
            ) from exc
        try:
            db.execute(
                "INSERT INTO abonnement (membres, montants, date_paiement) VALUES (?, ?, ?)",
                (f"{last_name} {first_name}", fee, format_date(today)),
            )
        except LibraryError as exc:
            raise LibraryError(
                f"Erreur lors de l'enregistrement dans la table abonnement: {exc}"
            ) from exc
    return next(member for member in list_members(db) if member.id == member_id)