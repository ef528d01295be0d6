"""Tagged Ok/Err results returned by the gateway's entry operations"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union
from barcode_gateway.domain.exceptions import DomainException, ErrorKind, exception_for

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value"""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying the error kind and a user-facing message"""

    kind: ErrorKind
    message: str

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> Any:
        raise exception_for(self.kind)(self.message)


Result = Union[Ok[T], Err]


def capture(func: Callable[..., T], *args: Any, **kwargs: Any) -> "Result[T]":
    """
    Run func and fold domain exceptions into an Err.

    Anything that is not a DomainException (bugs, database outages) still
    propagates so the API layer can roll back and return a 500.
    """
    try:
        return Ok(func(*args, **kwargs))
    except DomainException as e:
        return Err(kind=e.kind, message=str(e))
