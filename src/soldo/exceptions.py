import abc
import typing


class SoldoError(Exception, metaclass=abc.ABCMeta):
    message: str

    def __str__(self):
        return self.message

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SoldoSDKError(SoldoError):
    pass


class MalformedInputError(SoldoError, TypeError):
    pass


class InvalidPathError(SoldoError):
    kind: str

    def __init__(self, kind: str, message: str):
        super().__init__(f"{kind} {message}")
        self.kind = kind


class InvalidRelationshipError(SoldoError):
    pass


class InvalidClassError(SoldoError, ValueError):
    name: typing.Any

    def __init__(self, name: typing.Any, message: str):
        super().__init__(message)
        self.name = name


class CastError(SoldoError):
    attribute: str

    def __init__(self, attribute: str, detail: str):
        super().__init__(f"Could not cast {attribute}. {detail}")
        self.attribute = attribute


class InvalidCollectionError(SoldoError):
    field: typing.Optional[str]

    def __init__(self, message: str, field: typing.Optional[str] = None):
        super().__init__(message)
        self.field = field


class InvalidEventError(SoldoError):
    pass


class TransportError(SoldoError):
    status_code: typing.Optional[int]

    def __init__(self, message: str, status_code: typing.Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
