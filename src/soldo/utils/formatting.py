import typing


def english_enumerate(items: typing.Iterable[str], conj: str = "and") -> str:
    """
    Joins ``items`` the way they would be listed in an English sentence.

    >>> english_enumerate(["Card", "Employee", "Transaction"], "or")
    'Card, Employee, or Transaction'
    """
    words = list(items)
    if len(words) < 2:
        return "".join(words)
    if len(words) == 2:
        return f"{words[0]} {conj} {words[1]}"
    return f"{', '.join(words[:-1])}, {conj} {words[-1]}"
