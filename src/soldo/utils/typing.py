import collections.abc
import typing


def is_dataset(value: typing.Any) -> bool:
    return isinstance(value, collections.abc.Mapping)


def is_integer(value: typing.Any) -> bool:
    # bool is a subclass of int but never a valid count
    return isinstance(value, int) and not isinstance(value, bool)


def is_sequence(value: typing.Any) -> bool:
    return isinstance(value, collections.abc.Sequence) and not isinstance(
        value, (str, bytes, bytearray)
    )


def is_sequence_of_datasets(value: typing.Any) -> bool:
    return is_sequence(value) and all(is_dataset(v) for v in value)
