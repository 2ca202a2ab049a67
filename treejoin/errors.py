"""
Errors raised by the join engine. They all indicate a misuse of the API, and
are raised at the call site.
"""


class JoinError(Exception):
    """
    Base class of the errors raised by `treejoin`.
    """

    pass


class TypeMismatchError(JoinError, TypeError):
    """
    Indicates that a `ValueBox` content was requested with a type different
    from the one of the stored value.
    """

    #: Type of the value stored in the box.
    stored: type

    #: Type that was requested.
    requested: type

    def __init__(self, stored: type, requested: type) -> None:
        super().__init__(
            f"Boxed value has type {stored.__qualname__}, "
            f"not {requested.__qualname__}."
        )
        self.stored = stored
        self.requested = requested


class ConsumedViewError(JoinError, RuntimeError):
    """
    Indicates that an enter or exit view has already been appended, or removed.
    """

    pass


class NullRootError(JoinError, ValueError):
    """
    Indicates that a document without root has been queried.
    """

    pass


class DuplicateKeyError(JoinError, KeyError):
    """
    Raised by a keyed join when two values share the same key, and duplicates
    are not allowed.
    """

    #: The duplicated key.
    key: object

    def __init__(self, key: object) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self):
        return f"Key {self.key!r} is shared by several values."
