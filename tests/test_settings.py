import pytest

from bibliotheque.catalog import Book, import_book, list_books
from bibliotheque.database import Database, LibraryError
from bibliotheque.settings import (
    add_cabinet,
    add_genre,
    get_fee,
    list_cabinets,
    list_genres,
    reset,
    save_parameters,
    set_fees,
)


@pytest.fixture
def db():
    with Database() as database:
        yield database


def test_add_and_list_cabinets_in_order(db):
    add_cabinet(db, "A1")
    add_cabinet(db, "B2")
    assert list_cabinets(db) == ["A1", "B2"]


def test_add_and_list_genres(db):
    add_genre(db, "Roman")
    add_genre(db, "Poésie")
    assert list_genres(db) == ["Roman", "Poésie"]


def test_empty_cabinet_name_rejected(db):
    with pytest.raises(LibraryError):
        add_cabinet(db, "")
    assert list_cabinets(db) == []


def test_save_parameters_requires_one_value(db):
    with pytest.raises(LibraryError):
        save_parameters(db, "", "")
    assert list_cabinets(db) == [] and list_genres(db) == []


def test_save_parameters_only_cabinet(db):
    save_parameters(db, "C3", "")
    assert list_cabinets(db) == ["C3"]
    assert list_genres(db) == []


def test_save_parameters_both(db):
    save_parameters(db, "C3", "Conte")
    assert list_cabinets(db) == ["C3"]
    assert list_genres(db) == ["Conte"]


def test_fees_start_at_zero(db):
    assert get_fee(db, "Adulte") == 0
    assert get_fee(db, "Enfant") == 0


def test_set_fees_round_trip(db):
    set_fees(db, 5000, "2000")
    assert get_fee(db, "Adulte") == 5000
    assert get_fee(db, "Enfant") == 2000


def test_set_fees_rejects_empty(db):
    set_fees(db, 10, 20)
    with pytest.raises(LibraryError):
        set_fees(db, "", 30)
    assert get_fee(db, "Adulte") == 10
    assert get_fee(db, "Enfant") == 20


def test_set_fees_rejects_non_numeric(db):
    with pytest.raises(LibraryError):
        set_fees(db, "abc", 30)


def test_get_fee_unknown_status(db):
    with pytest.raises(LibraryError):
        get_fee(db, "Inconnu")


def test_reset_clears_data_but_keeps_fees(db):
    set_fees(db, 7000, 3000)
    add_cabinet(db, "A1")
    add_genre(db, "Roman")
    import_book(db, Book(identifier="X1", title="T", author="A", quantity=2))
    cleared = reset(db)
    assert "livres" in cleared
    assert "statut_montants" not in cleared
    assert list_books(db) == []
    assert list_cabinets(db) == []
    assert list_genres(db) == []
    assert get_fee(db, "Adulte") == 7000
    assert get_fee(db, "Enfant") == 3000


def test_reset_restarts_autoincrement(db):
    add_cabinet(db, "A1")
    add_cabinet(db, "A2")
    reset(db)
    add_cabinet(db, "B1")
    rows = db.query("SELECT id, armoire FROM armoires")
    assert [(row["id"], row["armoire"]) for row in rows] == [(1, "B1")]