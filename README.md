# bibliotheque

A small library-management toolkit backed by a single SQLite file. It keeps
the book catalogue, the members and their subscriptions, the current loans,
the history of returned loans and the money collected from subscriptions.
It can be used from Python or through the `bibliotheque` command.

## What it manages

- **Books**: title, genre, author, publisher, notes, shelf mark (the
  identifier, unique), cabinet, quantity and the date the book was added.
  A book is available while its quantity is above zero.
- **Cabinets and genres**: the lists the catalogue is sorted by.
- **Fees**: the subscription fee for adults (`Adulte`) and for children
  (`Enfant`). Both start at 0.
- **Members**: adults or children, with a membership period. A member starts
  with three loan tokens; each loan uses one, each return gives it back.
- **Renewals**: a renewal runs from the given day for one year (adults) or
  three months (children), adds the status fee to the member's amount paid,
  and records the payment as a subscription.
- **Loans**: a loan takes one copy of a book and one token from the member;
  it is refused when the member has no token left or the book has no copy on
  the shelf. Returning a loan moves it to the history, puts the copy back and
  gives the token back.
- **Subscriptions**: every renewal records a payment; totals can be taken
  overall, per member, or over a date range (both ends included).

Dates are stored as text in the `dd-mm-yyyy` form, except the return date in
the loan history, which is stored as `yyyy-mm-dd`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
bibliotheque --help
```

Every command works on the database given with `--db` (default:
`bibliotheque.db` in the current directory); the file and its tables are
created when missing. Errors are printed to standard error, prefixed with
`Erreur:`, and the command exits with status 1. Dates on the command line
are written `dd-mm-yyyy`.

| Command | What it does |
|---------|--------------|
| `books [--search T \| --cabinet C \| --genre G]` | list books; `Tous` as cabinet or genre lists them all |
| `book-add --identifier --title --author [--genre --publisher --properties --quantity --cabinet]` | add a book dated today |
| `book-edit OLD_TITLE [--title --author --genre --publisher --properties --quantity --cabinet]` | change the given fields of the books with that title |
| `book-delete IDENTIFIER` | remove a book |
| `import PATH` / `export PATH` | read or write the catalogue as CSV |
| `members [--search T]` | list members, with whether their membership is still valid |
| `member-add NOM PRENOMS [--status --sex --start --end --contact]` | register a member (default: `Adulte`, `Femme`, starting today, ending after one membership period) |
| `member-delete PRENOMS` | remove the members with these first names |
| `renew PRENOMS STATUS` | renew a membership from today |
| `loan PRENOMS TITLE [--start --end]` | lend a book (dates default to today) |
| `loans [--search T]` | list current loans; the search matches borrower or return date |
| `return LOAN_ID` | return a loan |
| `history [--search T]` / `history-clear` | browse or empty the loan history |
| `subscriptions [--search T] [--start D --end D]` | list payments, grouped per member when searching |
| `total [--start D --end D]` | total of payments, in Ar |
| `parameters [--cabinet C] [--genre G]` | add a cabinet and/or a genre |
| `cabinets` / `genres` | list them |
| `fees ADULT CHILD` | set the subscription fees |
| `reset` | delete all data except the fee table (and a `login` table, if the file has one) |

`reset`, `history-clear`, `book-delete` and `member-delete` act at once:
there is no confirmation step.

## Using it from Python

Open the database with `bibliotheque.database.Database`; it works as a
context manager and closes the file on exit, and `Database.transaction()`
groups statements so that they are all kept or all rolled back. Operations
report failures by raising `bibliotheque.database.LibraryError`.

```python
from datetime import date

from bibliotheque.database import Database
from bibliotheque import catalog, finance, loans, members, renewals, settings

with Database("library.db") as db:
    settings.add_cabinet(db, "A1")
    settings.add_genre(db, "Roman")
    settings.set_fees(db, 5000, 2000)

    catalog.add_book(
        db,
        catalog.Book(identifier="R-001", title="Les Misérables",
                     author="Victor Hugo", genre="Roman", quantity=2, cabinet="A1"),
        date.today(),
    )
    members.register_member(db, "Rabe", "Jean", "Adulte", "Homme",
                            date(2024, 1, 1), date(2024, 12, 31))
    renewals.renew_membership(db, "Jean", "Adulte", date.today())
    loans.create_loan(db, "Jean", "Les Misérables", date.today(), date.today())

    for book in catalog.search_books(db, "Hugo"):
        print(book, book.available())

    print(finance.total(db))
```

The modules, by area:

| Module                   | Purpose                                                 |
|--------------------------|---------------------------------------------------------|
| `bibliotheque.database`  | SQLite connection and schema, queries, `format_date` / `parse_date` |
| `bibliotheque.catalog`   | `Book`; adding, importing, listing, searching, filtering, deleting books |
| `bibliotheque.editing`   | `update_book`: changing a book's details by title       |
| `bibliotheque.csvio`     | importing and exporting the catalogue as CSV            |
| `bibliotheque.settings`  | cabinets, genres, fees, full reset                      |
| `bibliotheque.members`   | `Member`, `Status`, `Sex`; registering, listing, searching, deleting members |
| `bibliotheque.renewals`  | `membership_end`, `renew_membership`                    |
| `bibliotheque.loans`     | `Loan`; creating, listing and searching loans           |
| `bibliotheque.history`   | `HistoryEntry`; returning loans, browsing and clearing the history |
| `bibliotheque.finance`   | `Subscription`; payment listings and totals             |
| `bibliotheque.cli`       | the `bibliotheque` command (`main`)                     |

### CSV format

Files are UTF-8, semicolon-separated, with nine columns in this order:

```
Date_insertion;Titre;Auteur;genre;Edition;Proprietes;Cote;Armoire;Quantite
```

`csvio.export_csv` writes this header line first. `csvio.import_csv` skips
that header line, expects every other line to have exactly nine fields, and
raises `csvio.CsvFormatError`, naming the line, when one does not; the lines
before it stay imported. A quantity that is not a number is read as 0. Books
whose shelf mark is already present are left as they are. There is no
quoting: a field cannot contain a semicolon.

## What it does not do

- There is no graphical interface; the package offers the command line and
  the Python functions above.
- There are no user accounts or login: anyone who can open the database file
  can change it.
- Nothing is printed as a chart; the financial statement is the listing and
  totals from `bibliotheque.finance`.