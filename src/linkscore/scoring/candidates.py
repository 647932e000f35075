"""Candidate expansion for multi-valued identifier fields."""

__all__ = ["expand_candidates", "split_values"]


def split_values(value: str, delimiter: str) -> list[str]:
    """Split a multi-valued field, dropping empty tokens."""
    return [token for token in value.split(delimiter) if token]


def expand_candidates(value_a: str, value_b: str, delimiter: str) -> list[tuple[str, str]]:
    """Return every pairing of the values held by two multi-valued fields.

    Parameters
    ----------
    value_a : str
        Delimited values from the first record.
    value_b : str
        Delimited values from the second record.
    delimiter : str
        Literal separator between values.

    Returns
    -------
    list[tuple[str, str]]
        Cross product in row-major order: each token of ``value_a`` paired
        with each token of ``value_b``, both in their original order.

    Examples
    --------
        >>> expand_candidates("123;456", "456;789", ";")
        [('123', '456'), ('123', '789'), ('456', '456'), ('456', '789')]
    """
    tokens_b = split_values(value_b, delimiter)
    return [(a, b) for a in split_values(value_a, delimiter) for b in tokens_b]
