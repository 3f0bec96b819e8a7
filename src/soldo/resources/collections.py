from .collection import Collection
from .models import Card, Employee, ExpenseCentre, Transaction, Wallet


class Wallets(Collection):
    item_type = Wallet


class Cards(Collection):
    item_type = Card


class Employees(Collection):
    item_type = Employee


class ExpenseCentres(Collection):
    item_type = ExpenseCentre


class Transactions(Collection):
    item_type = Transaction


COLLECTIONS = {
    collection.__name__: collection
    for collection in (Wallets, Cards, Employees, ExpenseCentres, Transactions)
}
