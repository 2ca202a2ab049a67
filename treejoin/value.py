"""
This module defines the `ValueBox`, which is the container used to store the
values bound to the elements of a selection.
"""

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Generic, TypeVar, overload

from .errors import TypeMismatchError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class ValueBox(Generic[T]):
    """
    Type-erased container, owning a copy of a value of any type.

    The concrete type of the value is recorded on construction, so that the
    value can later be retrieved with a type check. Copying a box copies the
    value it holds, keeping its concrete type:

    >>> box = ValueBox([1, 2])
    >>> box.get(list)
    [1, 2]
    >>> box.get(tuple)
    Traceback (most recent call last):
    ...
    treejoin.errors.TypeMismatchError: Boxed value has type list, not tuple.
    """

    #: The stored value. It is a deep copy of the value given on construction.
    value: T

    #: Concrete type of `value`.
    value_type: type = field(init=False, compare=True)

    def __post_init__(self):
        object.__setattr__(self, "value", deepcopy(self.value))
        object.__setattr__(self, "value_type", type(self.value))

    @overload
    def get(self) -> T: ...

    @overload
    def get(self, expected_type: type[U]) -> U: ...

    def get(self, expected_type=None):
        """
        Return the stored value. If `expected_type` is given, it must be exactly
        the type of the stored value, otherwise a `TypeMismatchError` is
        raised. Sub-classes are not accepted.
        """
        if expected_type is not None and expected_type is not self.value_type:
            raise TypeMismatchError(self.value_type, expected_type)

        return self.value

    def copy(self) -> "ValueBox[T]":
        """
        Return an independent box holding a copy of the value.
        """
        return ValueBox(self.value)

    def __copy__(self) -> "ValueBox[T]":
        return self.copy()
