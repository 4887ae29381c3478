"""Financial statement: membership payments and their totals."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from .database import Database, parse_date

CURRENCY = "Ar"


@dataclass
class Subscription:
    """One recorded membership payment; ``date_paid`` is ``dd-MM-yyyy`` text."""

    id: int | None
    member: str
    amount: int
    date_paid: str


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _subscription(row: Any) -> Subscription:
    return Subscription(
        id=row["id"],
        member=_text(row["membres"]),
        amount=_int(row["montants"]),
        date_paid=_text(row["date_paiement"]),
    )


def list_subscriptions(db: Database) -> list[Subscription]:
    """Every payment, in the order it was recorded."""
    rows = db.query(
        "SELECT id, membres, montants, date_paiement FROM abonnement ORDER BY rowid"
    )
    return [_subscription(row) for row in rows]


def total(db: Database) -> int:
    """Sum of every payment; 0 when there is none."""
    rows = db.query("SELECT COALESCE(SUM(montants), 0) AS somme FROM abonnement")
    return _int(rows[0]["somme"]) if rows else 0


def search_subscriptions(db: Database, text: str) -> list[Subscription]:
    """Payments grouped by member, for members whose name contains ``text``.

    Each result carries the id and date of the member's first payment and, as
    its amount, the sum of all of that member's payments.
    """
    rows = db.query(
        "SELECT a.id AS id, a.membres AS membres, t.somme AS montants, "
        "a.date_paiement AS date_paiement "
        "FROM abonnement AS a JOIN ("
        "  SELECT membres, MIN(id) AS premier, SUM(montants) AS somme "
        "  FROM abonnement WHERE membres LIKE ? GROUP BY membres"
        ") AS t ON a.id = t.premier ORDER BY a.id",
        (f"%{text}%",),
    )
    return [_subscription(row) for row in rows]


def subscriptions_between(db: Database, start: date, end: date) -> list[Subscription]:
    """Payments made from ``start`` to ``end``, both days included."""
    found = []
    for subscription in list_subscriptions(db):
        paid = parse_date(subscription.date_paid)
        if paid is not None and start <= paid <= end:
            found.append(subscription)
    return found


def total_between(db: Database, start: date, end: date) -> int:
    """Sum of the payments made from ``start`` to ``end``, both days included."""
    return sum(s.amount for s in subscriptions_between(db, start, end))