from .base import Resource  # noqa
from .collection import Collection  # noqa
from .collections import (  # noqa
    COLLECTIONS,
    Cards,
    Employees,
    ExpenseCentres,
    Transactions,
    Wallets,
)
from .models import (  # noqa
    Card,
    Company,
    Employee,
    ExpenseCentre,
    Transaction,
    Wallet,
)
