from datetime import date

import pytest

from bibliotheque.database import Database
from bibliotheque.finance import (
    Subscription,
    list_subscriptions,
    search_subscriptions,
    subscriptions_between,
    total,
    total_between,
)


def _pay(db, member, amount, when):
    db.execute(
        "INSERT INTO abonnement (membres, montants, date_paiement) VALUES (?, ?, ?)",
        (member, amount, when),
    )


@pytest.fixture
def db():
    with Database() as database:
        yield database


@pytest.fixture
def filled(db):
    _pay(db, "Rakoto Jean", 100, "05-01-2024")
    _pay(db, "Rabe Marie", 50, "10-02-2024")
    _pay(db, "Rakoto Jean", 100, "15-03-2024")
    _pay(db, "Rabe Marie", 50, "not a date")
    return db


def test_empty_database_has_no_subscriptions(db):
    assert list_subscriptions(db) == []
    assert total(db) == 0


def test_list_keeps_recording_order(filled):
    found = list_subscriptions(filled)
    assert [s.member for s in found] == [
        "Rakoto Jean",
        "Rabe Marie",
        "Rakoto Jean",
        "Rabe Marie",
    ]
    assert found[0] == Subscription(
        id=found[0].id, member="Rakoto Jean", amount=100, date_paid="05-01-2024"
    )


def test_total_is_sum_of_listed_amounts(filled):
    assert total(filled) == sum(s.amount for s in list_subscriptions(filled))


def test_search_groups_by_member(filled):
    found = search_subscriptions(filled, "Rakoto")
    assert len(found) == 1
    assert found[0].member == "Rakoto Jean"
    assert found[0].amount == sum(
        s.amount for s in list_subscriptions(filled) if s.member == "Rakoto Jean"
    )
    assert found[0].date_paid == "05-01-2024"


def test_search_without_match(filled):
    assert search_subscriptions(filled, "Nobody") == []


def test_search_empty_text_covers_every_member(filled):
    found = search_subscriptions(filled, "")
    assert {s.member for s in found} == {"Rakoto Jean", "Rabe Marie"}
    assert sum(s.amount for s in found) == total(filled)


def test_between_includes_both_bounds(filled):
    found = subscriptions_between(filled, date(2024, 1, 5), date(2024, 2, 10))
    assert [s.date_paid for s in found] == ["05-01-2024", "10-02-2024"]


def test_between_compares_real_dates_not_text(filled):
    found = subscriptions_between(filled, date(2024, 3, 1), date(2024, 3, 31))
    assert [s.date_paid for s in found] == ["15-03-2024"]


def test_between_skips_invalid_dates(filled):
    found = subscriptions_between(filled, date(1900, 1, 1), date(2100, 1, 1))
    assert all(s.date_paid != "not a date" for s in found)
    assert len(found) == 3


def test_total_between_matches_listed(filled):
    start, end = date(2024, 1, 1), date(2024, 2, 28)
    assert total_between(filled, start, end) == sum(
        s.amount for s in subscriptions_between(filled, start, end)
    )
    assert total_between(filled, date(2030, 1, 1), date(2030, 12, 31)) == 0