import pytest

from bibliotheque.catalog import Book, import_book, list_books
from bibliotheque.csvio import (
    CsvFormatError,
    export_csv,
    format_row,
    import_csv,
    parse_row,
    read_books,
)
from bibliotheque.database import Database, LibraryError

HEADER = "Date_insertion;Titre;Auteur;genre;Edition;Proprietes;Cote;Armoire;Quantite"


@pytest.fixture
def db():
    with Database() as database:
        yield database


def _sample(identifier="R-001", title="Le Petit Prince", quantity=3):
    return Book(
        identifier=identifier,
        title=title,
        author="Saint-Exupéry",
        genre="Conte",
        publisher="Gallimard",
        properties="Relié",
        quantity=quantity,
        cabinet="A1",
        date_inserted="01-02-2024",
    )


def test_parse_row_maps_columns():
    book = parse_row(" 01-02-2024 ;Titre; Auteur ;Genre;Ed;Prop;C-9;A1;4")
    assert book == Book(
        identifier="C-9",
        title="Titre",
        author="Auteur",
        genre="Genre",
        publisher="Ed",
        properties="Prop",
        quantity=4,
        cabinet="A1",
        date_inserted="01-02-2024",
    )


def test_parse_row_bad_quantity_is_zero():
    book = parse_row("d;t;a;g;e;p;i;c;many")
    assert book.quantity == 0


def test_parse_row_wrong_column_count():
    with pytest.raises(CsvFormatError) as info:
        parse_row("a;b;c", 7)
    assert info.value.line_number == 7
    assert info.value.found == 3
    assert "ligne 7" in str(info.value)


def test_format_row_round_trip():
    book = _sample()
    assert parse_row(format_row(book)) == book


def test_format_row_column_order():
    fields = format_row(_sample()).split(";")
    assert fields[0] == "01-02-2024"
    assert fields[6] == "R-001"
    assert fields[8] == "3"


def test_read_books_skips_header_and_line_ends():
    lines = [HEADER + "\n", format_row(_sample()) + "\r\n"]
    assert list(read_books(lines)) == [_sample()]


def test_read_books_reports_line_number():
    lines = [format_row(_sample()), "broken"]
    with pytest.raises(CsvFormatError) as info:
        list(read_books(lines))
    assert info.value.line_number == 2


def test_export_writes_header(tmp_path):
    path = tmp_path / "out.csv"
    assert export_csv([_sample()], path) == 1
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines == [HEADER, format_row(_sample())]


def test_export_import_round_trip(tmp_path, db):
    books = [_sample("R-001", "Un"), _sample("R-002", "Deux", quantity=0)]
    path = tmp_path / "books.csv"
    export_csv(books, path)
    assert import_csv(db, path) == 2
    assert list_books(db) == books


def test_import_ignores_existing_identifiers(tmp_path, db):
    import_book(db, _sample("R-001", "Original"))
    path = tmp_path / "books.csv"
    export_csv([_sample("R-001", "Autre")], path)
    import_csv(db, path)
    assert [book.title for book in list_books(db)] == ["Original"]


def test_import_stops_at_bad_line_keeping_earlier_rows(tmp_path, db):
    path = tmp_path / "books.csv"
    path.write_text(format_row(_sample()) + "\nbad;line\n", encoding="utf-8")
    with pytest.raises(CsvFormatError):
        import_csv(db, path)
    assert list_books(db) == [_sample()]


def test_import_missing_file(tmp_path, db):
    with pytest.raises(LibraryError):
        import_csv(db, tmp_path / "absent.csv")


def test_export_to_unwritable_path(tmp_path):
    with pytest.raises(LibraryError):
        export_csv([_sample()], tmp_path / "missing" / "out.csv")