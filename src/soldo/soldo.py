import typing

from .client import SoldoClient, Transport
from .config import Config
from .event import SoldoEvent
from .logging_config import configure_logging
from .resources import (
    Card,
    Cards,
    Company,
    Employee,
    Employees,
    ExpenseCentre,
    ExpenseCentres,
    Resource,
    Transaction,
    Transactions,
    Wallet,
    Wallets,
)
from .transport import HTTPTransport, OAuthCredential
from .types import JSONObject

SearchFields = typing.Optional[typing.Mapping[str, typing.Any]]


class Soldo:
    """
    Entry point of the SDK.

    :param config: a :py:class:`~soldo.config.Config`, or a mapping accepted by
        :py:meth:`Config.from_mapping <soldo.config.Config.from_mapping>`.  Keyword
        options are merged over it.
    :param Optional[Transport] transport: the transport to use.  An
        :py:class:`~soldo.transport.HTTPTransport` is built from the
        configuration when omitted.
    """

    config: Config
    client: SoldoClient
    _owned_transport: typing.Optional[HTTPTransport]

    def get_wallets(self, search_fields: SearchFields = None) -> typing.List[Resource]:
        return self.client.get_collection(Wallets, search_fields).get()

    def get_wallet(self, id: typing.Any) -> Wallet:
        return typing.cast(Wallet, self.client.get_item(Wallet, id))

    def get_wallet_cards(self, id: typing.Any) -> typing.List[Resource]:
        return self.client.get_relationship(Wallet, id, "cards")

    def get_expense_centres(self, search_fields: SearchFields = None) -> typing.List[Resource]:
        return self.client.get_collection(ExpenseCentres, search_fields).get()

    def get_expense_centre(self, id: typing.Any) -> ExpenseCentre:
        return typing.cast(ExpenseCentre, self.client.get_item(ExpenseCentre, id))

    def update_expense_centre(self, id: typing.Any, data: JSONObject) -> ExpenseCentre:
        return typing.cast(ExpenseCentre, self.client.update_item(ExpenseCentre, id, data))

    def get_employees(self, search_fields: SearchFields = None) -> typing.List[Resource]:
        return self.client.get_collection(Employees, search_fields).get()

    def get_employee(self, id: typing.Any) -> Employee:
        return typing.cast(Employee, self.client.get_item(Employee, id))

    def update_employee(self, id: typing.Any, data: JSONObject) -> Employee:
        return typing.cast(Employee, self.client.update_item(Employee, id, data))

    def get_cards(self, search_fields: SearchFields = None) -> typing.List[Resource]:
        return self.client.get_collection(Cards, search_fields).get()

    def get_card(self, id: typing.Any) -> Card:
        return typing.cast(Card, self.client.get_item(Card, id))

    def get_transactions(self, search_fields: SearchFields = None) -> typing.List[Resource]:
        return self.client.get_collection(Transactions, search_fields).get()

    def get_transaction(self, id: typing.Any) -> Transaction:
        return typing.cast(Transaction, self.client.get_item(Transaction, id))

    def get_company(self) -> Company:
        return typing.cast(Company, self.client.get_item(Company))

    def verify_event(
        self,
        data: JSONObject,
        fingerprint: str,
        fingerprint_order: str,
        internal_token: str,
    ) -> SoldoEvent:
        return SoldoEvent(data, fingerprint, fingerprint_order, internal_token)

    def close(self) -> None:
        """
        Releases the HTTP transport built by this instance.  An injected
        transport is left to its owner.
        """
        if self._owned_transport is not None:
            self._owned_transport.close()

    def __enter__(self) -> "Soldo":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __init__(
        self,
        config: typing.Union[Config, typing.Mapping[str, typing.Any], None] = None,
        transport: typing.Optional[Transport] = None,
        **options: typing.Any,
    ):
        if isinstance(config, Config):
            if options:
                config = Config.from_mapping({**vars(config), **options})
        else:
            config = Config.from_mapping({**(config or {}), **options})
        self.config = config

        configure_logging(config)

        self._owned_transport = None
        if transport is None:
            transport = self._owned_transport = HTTPTransport(
                OAuthCredential(config.client_id, config.client_secret),
                environment=config.environment,
            )
        self.client = SoldoClient(transport)
