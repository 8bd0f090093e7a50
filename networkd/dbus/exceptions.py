"""
Exceptions raised while talking to systemd-networkd over D-Bus.


Copyright (c) 2023 Proton AG

This file is part of python-networkd.

python-networkd is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

python-networkd is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with python-networkd.  If not, see <https://www.gnu.org/licenses/>.
"""
from typing import Iterator, Optional, Type, TypeVar

# D-Bus error returned when the unit backing a bus-activatable service,
# systemd-networkd in our case, does not exist.
NO_SUCH_UNIT_ERROR = "org.freedesktop.systemd1.NoSuchUnit"

ExceptionT = TypeVar("ExceptionT", bound=BaseException)


class NetworkdError(Exception):
    """Base class for python-networkd exceptions"""
    def __init__(self, message, additional_context=None):
        self.message = message
        self.additional_context = additional_context
        super().__init__(self.message)


class TransportError(NetworkdError):
    """
    The bus could not be reached or a D-Bus method call failed.

    When the error was raised by the remote peer, `remote_error_name`
    holds the D-Bus error name, e.g. `org.freedesktop.DBus.Error.AccessDenied`.
    """
    def __init__(self, message, remote_error_name: Optional[str] = None, additional_context=None):
        self.remote_error_name = remote_error_name
        super().__init__(message, additional_context)


class PropertyError(NetworkdError):
    """A D-Bus property could not be fetched."""


class DecodeError(NetworkdError, ValueError):
    """A D-Bus reply did not have the expected shape."""


class NotFoundError(NetworkdError, LookupError):
    """
    The targeted remote resource does not exist.

    The error it was derived from is kept both as `original` and as
    the exception cause.
    """
    def __init__(self, message, original: BaseException = None, additional_context=None):
        self.original = original
        super().__init__(message, additional_context)


def iter_causes(exc: BaseException) -> Iterator[BaseException]:
    """Yields the exception followed by its chain of explicit causes."""
    seen = set()
    while exc is not None and id(exc) not in seen:
        seen.add(id(exc))
        yield exc
        exc = exc.__cause__


def find_cause(exc: BaseException, exc_type: Type[ExceptionT]) -> Optional[ExceptionT]:
    """
    Returns the first exception in the chain of `exc` which is an instance
    of `exc_type`, or None if there isn't any.
    """
    for cause in iter_causes(exc):
        if isinstance(cause, exc_type):
            return cause

    return None


def is_not_found(exc: BaseException) -> bool:
    """Returns True if the exception, or any of its causes, is a NotFoundError."""
    return find_cause(exc, NotFoundError) is not None


def normalize_not_found(exc: BaseException) -> BaseException:
    """
    Reclassifies D-Bus "no such unit" errors as NotFoundError.

        :param exc: exception to normalize.
        :return: a NotFoundError caused by `exc` if any exception in its chain
            is a TransportError with the no such unit D-Bus error name.
            Otherwise, `exc` itself.
    """
    bus_error = find_cause(exc, TransportError)
    if bus_error is None or bus_error.remote_error_name != NO_SUCH_UNIT_ERROR:
        return exc

    not_found = NotFoundError(f"{exc}: resource does not exist", original=exc)
    not_found.__cause__ = exc
    return not_found
