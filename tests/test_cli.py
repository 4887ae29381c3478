import pytest

from bibliotheque.cli import main


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "library.db")


def _add_book(db_path, identifier="C-1", title="Les Misérables", quantity="2"):
    return main(
        [
            "--db", db_path, "book-add",
            "--identifier", identifier,
            "--title", title,
            "--author", "Hugo",
            "--quantity", quantity,
        ]
    )


def test_add_then_list_books(db_path, capsys):
    assert _add_book(db_path) == 0
    capsys.readouterr()
    assert main(["--db", db_path, "books"]) == 0
    out = capsys.readouterr().out
    assert "Les Misérables" in out
    assert "C-1" in out
    assert "\tdisponible" in out


def test_missing_fields_fail(db_path, capsys):
    assert main(["--db", db_path, "book-add", "--title", "Seul"]) == 1
    assert "Veuillez remplir tous les champs obligatoires." in capsys.readouterr().err


def test_delete_unknown_book_fails(db_path, capsys):
    assert main(["--db", db_path, "book-delete", "absent"]) == 1
    assert "absent" in capsys.readouterr().err


def test_export_import_round_trip(tmp_path, db_path, capsys):
    _add_book(db_path)
    csv_path = str(tmp_path / "books.csv")
    assert main(["--db", db_path, "export", csv_path]) == 0
    other = str(tmp_path / "other.db")
    assert main(["--db", other, "import", csv_path]) == 0
    capsys.readouterr()
    main(["--db", other, "books", "--search", "Hugo"])
    out = capsys.readouterr().out
    assert "C-1" in out
    assert "Les Misérables" in out


def test_renewal_is_counted_in_total(db_path, capsys):
    assert main(["--db", db_path, "fees", "100", "50"]) == 0
    assert main(["--db", db_path, "member-add", "Rakoto", "Jean", "--status", "Adulte"]) == 0
    assert main(["--db", db_path, "renew", "Jean", "Adulte"]) == 0
    capsys.readouterr()
    assert main(["--db", db_path, "total"]) == 0
    assert capsys.readouterr().out.strip() == "100 Ar"


def test_loan_and_return_move_to_history(db_path, capsys):
    _add_book(db_path, quantity="1")
    main(["--db", db_path, "member-add", "Rabe", "Marie"])
    assert main(["--db", db_path, "loan", "Marie", "Les Misérables"]) == 0
    capsys.readouterr()
    main(["--db", db_path, "loans"])
    loan_line = capsys.readouterr().out.strip()
    assert "Marie" in loan_line
    loan_id = loan_line.split("\t")[0]
    assert main(["--db", db_path, "return", loan_id]) == 0
    capsys.readouterr()
    main(["--db", db_path, "loans"])
    assert capsys.readouterr().out == ""
    main(["--db", db_path, "history", "--search", "Marie"])
    assert "Les Misérables" in capsys.readouterr().out


def test_loan_of_unavailable_book_fails(db_path, capsys):
    _add_book(db_path, quantity="0")
    main(["--db", db_path, "member-add", "Rabe", "Marie"])
    assert main(["--db", db_path, "loan", "Marie", "Les Misérables"]) == 1
    assert "Quantité insuffisante" in capsys.readouterr().err


def test_parameters_listed(db_path, capsys):
    assert main(["--db", db_path, "parameters", "--cabinet", "A1", "--genre", "Roman"]) == 0
    capsys.readouterr()
    main(["--db", db_path, "cabinets"])
    assert capsys.readouterr().out.splitlines() == ["A1"]
    main(["--db", db_path, "genres"])
    assert capsys.readouterr().out.splitlines() == ["Roman"]


def test_invalid_date_argument_exits(db_path):
    with pytest.raises(SystemExit) as info:
        main(["--db", db_path, "total", "--start", "2024-01-01"])
    assert info.value.code == 2