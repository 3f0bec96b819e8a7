"""
The resource kinds exposed by the Soldo business API.

Each kind is registered under its class name so that cast maps, relationship
maps, collections and webhook events can refer to it by name.
"""
from ..registry import registry
from .base import Resource


@registry.register
class Card(Resource):
    """
    A payment card, assigned to an employee or to a company wallet.
    """

    base_path = "/cards"
    path = "/{id}"
    event_type = "Card"


@registry.register
class Wallet(Resource):
    base_path = "/wallets"
    path = "/{id}"
    relationships = {
        "cards": Card,
    }


@registry.register
class Employee(Resource):
    base_path = "/employees"
    path = "/{id}"
    white_listed = (
        "department",
        "job_title",
    )
    relationships = {
        "cards": Card,
    }
    event_type = "Employee"


@registry.register
class ExpenseCentre(Resource):
    base_path = "/expensecentres"
    path = "/{id}"
    white_listed = ("assignee",)


@registry.register
class Transaction(Resource):
    base_path = "/transactions"
    path = "/{id}"
    event_type = "Transaction"


@registry.register
class Company(Resource):
    """
    The company owning the API credentials.  There is exactly one, so it lives
    at its base path.
    """

    base_path = "/company"
