"""Command line interface to the library database."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from datetime import date
from typing import Callable, Sequence

from .catalog import (
    Book,
    add_book,
    delete_book,
    filter_by_cabinet,
    filter_by_genre,
    list_books,
    search_books,
)
from .csvio import export_csv, import_csv
from .database import Database, LibraryError, parse_date
from .editing import update_book
from .finance import (
    CURRENCY,
    list_subscriptions,
    search_subscriptions,
    subscriptions_between,
    total,
    total_between,
)
from .history import clear_history, list_history, return_loan, search_history
from .loans import create_loan, list_loans, search_loans
from .members import (
    Sex,
    Status,
    delete_member,
    list_members,
    register_member,
    search_members,
)
from .renewals import membership_end, renew_membership
from .settings import (
    list_cabinets,
    list_genres,
    reset,
    save_parameters,
    set_fees,
)

DEFAULT_DATABASE = "bibliotheque.db"


def _date_arg(text: str) -> date:
    parsed = parse_date(text)
    if parsed is None:
        raise argparse.ArgumentTypeError(f"date invalide (jj-mm-aaaa): {text!r}")
    return parsed


def _validity(valid: bool) -> str:
    return "valide" if valid else "expiré"


def _print_books(books: list[Book]) -> int:
    for book in books:
        state = "disponible" if book.available() else "indisponible"
        print(
            "\t".join(
                (
                    book.date_inserted,
                    book.title,
                    book.author,
                    book.genre,
                    book.publisher,
                    book.properties,
                    book.identifier,
                    book.cabinet,
                    str(book.quantity),
                    state,
                )
            )
        )
    return 0


def _books(db: Database, args: argparse.Namespace) -> int:
    if args.search is not None:
        return _print_books(search_books(db, args.search))
    if args.cabinet is not None:
        return _print_books(filter_by_cabinet(db, args.cabinet))
    if args.genre is not None:
        return _print_books(filter_by_genre(db, args.genre))
    return _print_books(list_books(db))


def _book_add(db: Database, args: argparse.Namespace) -> int:
    book = Book(
        identifier=args.identifier,
        title=args.title,
        author=args.author,
        genre=args.genre,
        publisher=args.publisher,
        properties=args.properties,
        quantity=args.quantity,
        cabinet=args.cabinet,
    )
    add_book(db, book, date.today())
    print("Ajout réussi")
    return 0


def _book_edit(db: Database, args: argparse.Namespace) -> int:
    current = next((b for b in list_books(db) if b.title == args.old_title), None)
    if current is None:
        raise LibraryError(f"Livre non trouvé: {args.old_title}")
    changes = {
        field: value
        for field, value in (
            ("title", args.title),
            ("author", args.author),
            ("genre", args.genre),
            ("publisher", args.publisher),
            ("properties", args.properties),
            ("quantity", args.quantity),
            ("cabinet", args.cabinet),
        )
        if value is not None
    }
    count = update_book(db, args.old_title, replace(current, **changes))
    print(f"{count} livre(s) modifié(s)")
    return 0


def _book_delete(db: Database, args: argparse.Namespace) -> int:
    if not delete_book(db, args.identifier):
        raise LibraryError(f"Livre non trouvé: {args.identifier}")
    print("Le livre a été supprimé avec succès")
    return 0


def _import(db: Database, args: argparse.Namespace) -> int:
    count = import_csv(db, args.path)
    print(f"Importation terminée: {count} ligne(s)")
    return 0


def _export(db: Database, args: argparse.Namespace) -> int:
    count = export_csv(list_books(db), args.path)
    print(f"Exportation terminée: {count} livre(s)")
    return 0


def _members(db: Database, args: argparse.Namespace) -> int:
    members = list_members(db) if args.search is None else search_members(db, args.search)
    today = date.today()
    for m in members:
        print(
            "\t".join(
                (
                    m.last_name,
                    m.first_name,
                    m.status,
                    m.sex,
                    m.start,
                    m.end,
                    m.contact,
                    str(m.amount),
                    _validity(m.is_valid(today)),
                )
            )
        )
    return 0


def _member_add(db: Database, args: argparse.Namespace) -> int:
    start = args.start or date.today()
    end = args.end or membership_end(args.status, start)
    register_member(
        db, args.nom, args.prenoms, args.status, args.sex, start, end, args.contact
    )
    print("Ajout réussi!!")
    return 0


def _member_delete(db: Database, args: argparse.Namespace) -> int:
    if delete_member(db, args.prenoms) == 0:
        raise LibraryError(f"Membre non trouvé: {args.prenoms}")
    print("Suppression réussie")
    return 0


def _renew(db: Database, args: argparse.Namespace) -> int:
    member = renew_membership(db, args.prenoms, args.status, date.today())
    print(f"{member.first_name}\t{member.start}\t{member.end}\t{member.amount}")
    return 0


def _loan(db: Database, args: argparse.Namespace) -> int:
    today = date.today()
    loan = create_loan(
        db, args.prenoms, args.title, args.start or today, args.end or today
    )
    print(f"Emprunt enregistré: {loan.id}")
    return 0


def _loans(db: Database, args: argparse.Namespace) -> int:
    loans = list_loans(db) if args.search is None else search_loans(db, args.search)
    today = date.today()
    for loan in loans:
        print(
            f"{loan.id}\t{loan.title}\t{loan.start}\t{loan.end}\t{loan.borrower}\t"
            f"{_validity(loan.is_valid(today))}"
        )
    return 0


def _return(db: Database, args: argparse.Namespace) -> int:
    entry = return_loan(db, args.loan_id, date.today())
    print(f"Retour enregistré: {entry.book} par {entry.borrower}")
    return 0


def _history(db: Database, args: argparse.Namespace) -> int:
    entries = list_history(db) if args.search is None else search_history(db, args.search)
    for e in entries:
        print(
            f"{e.id}\t{e.loan_id}\t{e.borrower}\t{e.book}\t{e.start}\t{e.end}\t"
            f"{e.date_removed}"
        )
    return 0


def _history_clear(db: Database, args: argparse.Namespace) -> int:
    count = clear_history(db)
    print(f"Suppression effectuée: {count}")
    return 0


def _range(args: argparse.Namespace) -> tuple[date, date] | None:
    if args.start is None and args.end is None:
        return None
    today = date.today()
    return args.start or today, args.end or today


def _subscriptions(db: Database, args: argparse.Namespace) -> int:
    span = _range(args)
    if args.search is not None:
        found = search_subscriptions(db, args.search)
    elif span is not None:
        found = subscriptions_between(db, *span)
    else:
        found = list_subscriptions(db)
    for s in found:
        print(f"{s.id}\t{s.member}\t{s.amount}\t{s.date_paid}")
    return 0


def _total(db: Database, args: argparse.Namespace) -> int:
    span = _range(args)
    amount = total(db) if span is None else total_between(db, *span)
    print(f"{amount} {CURRENCY}")
    return 0


def _parameters(db: Database, args: argparse.Namespace) -> int:
    save_parameters(db, args.cabinet or "", args.genre or "")
    print("Modifications effectuées avec succès.")
    return 0


def _cabinets(db: Database, args: argparse.Namespace) -> int:
    for name in list_cabinets(db):
        print(name)
    return 0


def _genres(db: Database, args: argparse.Namespace) -> int:
    for name in list_genres(db):
        print(name)
    return 0


def _fees(db: Database, args: argparse.Namespace) -> int:
    set_fees(db, args.adult, args.child)
    print("Les montants ont été mis à jour avec succès.")
    return 0


def _reset(db: Database, args: argparse.Namespace) -> int:
    reset(db)
    print("Reinitialisation effectuée")
    return 0


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bibliotheque", description="Gestion de bibliothèque")
    parser.add_argument("--db", default=DEFAULT_DATABASE, help="fichier de base de données")
    sub = parser.add_subparsers(dest="command", required=True)

    def command(name: str, handler: Callable[..., int], help_text: str) -> argparse.ArgumentParser:
        p = sub.add_parser(name, help=help_text)
        p.set_defaults(handler=handler)
        return p

    p = command("books", _books, "lister les livres")
    group = p.add_mutually_exclusive_group()
    group.add_argument("--search")
    group.add_argument("--cabinet")
    group.add_argument("--genre")

    p = command("book-add", _book_add, "ajouter un livre")
    p.add_argument("--identifier", default="")
    p.add_argument("--title", default="")
    p.add_argument("--author", default="")
    p.add_argument("--genre", default="")
    p.add_argument("--publisher", default="")
    p.add_argument("--properties", default="")
    p.add_argument("--quantity", type=int, default=0)
    p.add_argument("--cabinet", default="")

    p = command("book-edit", _book_edit, "modifier un livre")
    p.add_argument("old_title")
    for option in ("--title", "--author", "--genre", "--publisher", "--properties", "--cabinet"):
        p.add_argument(option)
    p.add_argument("--quantity", type=int)

    p = command("book-delete", _book_delete, "supprimer un livre")
    p.add_argument("identifier")

    p = command("import", _import, "importer un fichier CSV")
    p.add_argument("path")
    p = command("export", _export, "exporter le catalogue en CSV")
    p.add_argument("path")

    p = command("members", _members, "lister les membres")
    p.add_argument("--search")

    p = command("member-add", _member_add, "inscrire un membre")
    p.add_argument("nom")
    p.add_argument("prenoms")
    p.add_argument("--status", choices=[s.value for s in Status], default=Status.ADULT.value)
    p.add_argument("--sex", choices=[s.value for s in Sex], default=Sex.FEMALE.value)
    p.add_argument("--start", type=_date_arg)
    p.add_argument("--end", type=_date_arg)
    p.add_argument("--contact", default="")

    p = command("member-delete", _member_delete, "supprimer un membre")
    p.add_argument("prenoms")

    p = command("renew", _renew, "renouveler un abonnement")
    p.add_argument("prenoms")
    p.add_argument("status", choices=[s.value for s in Status])

    p = command("loan", _loan, "enregistrer un emprunt")
    p.add_argument("prenoms")
    p.add_argument("title")
    p.add_argument("--start", type=_date_arg)
    p.add_argument("--end", type=_date_arg)

    p = command("loans", _loans, "lister les emprunts")
    p.add_argument("--search")

    p = command("return", _return, "rendre un livre emprunté")
    p.add_argument("loan_id", type=int)

    p = command("history", _history, "historique des emprunts")
    p.add_argument("--search")
    command("history-clear", _history_clear, "vider l'historique")

    for name, handler, help_text in (
        ("subscriptions", _subscriptions, "lister les paiements"),
        ("total", _total, "total des paiements"),
    ):
        p = command(name, handler, help_text)
        p.add_argument("--start", type=_date_arg)
        p.add_argument("--end", type=_date_arg)
        if name == "subscriptions":
            p.add_argument("--search")

    p = command("parameters", _parameters, "ajouter une armoire et/ou un genre")
    p.add_argument("--cabinet")
    p.add_argument("--genre")
    command("cabinets", _cabinets, "lister les armoires")
    command("genres", _genres, "lister les genres")

    p = command("fees", _fees, "fixer les montants d'abonnement")
    p.add_argument("adult")
    p.add_argument("child")

    command("reset", _reset, "effacer toutes les données")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run one command against the library database; return the exit status."""
    args = _parser().parse_args(argv)
    try:
        with Database(args.db) as db:
            return args.handler(db, args)
    except LibraryError as exc:
        print(f"Erreur: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())