"""
Thin layer over the D-Bus connection used to reach systemd-networkd.


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
import logging
from concurrent.futures import CancelledError
from dataclasses import dataclass
from typing import Optional

import gi
gi.require_version("Gio", "2.0")  # noqa: required before importing Gio module
gi.require_version("GLib", "2.0")  # noqa: required before importing GLib module
# pylint: disable=wrong-import-position
from gi.repository import Gio, GLib

from networkd.context import CallContext
from networkd.dbus.exceptions import DecodeError, TransportError
from networkd.dbus.variant import check_type

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DbusCall:
    """
    Describes a D-Bus method call.

    `method` is the fully qualified method name, that is, the interface
    name followed by the method name, e.g. `org.freedesktop.DBus.Properties.Get`.

    `args` is a tuple variant holding the positional arguments, or None if
    the method does not take any.

    `reply_type` is the D-Bus type the reply is expected to have. When it's
    None the reply is discarded.
    """
    service: str
    object_path: str
    method: str
    args: Optional[GLib.Variant] = None
    reply_type: Optional[str] = None

    @property
    def interface(self) -> str:
        """Returns the interface the method belongs to."""
        return self.method.rpartition(".")[0]

    @property
    def member(self) -> str:
        """Returns the method name, without the interface."""
        return self.method.rpartition(".")[2]


def translate_error(error: GLib.Error, description: str) -> Exception:
    """
    Translates a GLib error raised by Gio into the exception that should
    be raised in its place.

        :param error: error raised by Gio.
        :param description: description of the failed operation.
        :return: CancelledError if the operation was cancelled, TimeoutError
            if it timed out and TransportError otherwise.
    """
    if error.matches(Gio.io_error_quark(), Gio.IOErrorEnum.CANCELLED):
        return CancelledError(f"{description}: {error.message}")

    if error.matches(Gio.io_error_quark(), Gio.IOErrorEnum.TIMED_OUT):
        return TimeoutError(f"{description}: {error.message}")

    return TransportError(
        f"{description}: {error.message}",
        remote_error_name=Gio.DBusError.get_remote_error(error)
    )


def open_system_bus(ctx: CallContext) -> Gio.DBusConnection:
    """
    Opens a new private connection to the system bus.

    A private connection is used, instead of the one shared by the whole
    process, so that it can be closed without affecting other users.

        :param ctx: context used to cancel the operation.
        :return: the new connection.
    """
    ctx.raise_if_done()
    try:
        address = Gio.dbus_address_get_for_bus_sync(Gio.BusType.SYSTEM, ctx.cancellable)
        logger.debug("Connecting to the system bus at %s...", address)
        return Gio.DBusConnection.new_for_address_sync(
            address,
            Gio.DBusConnectionFlags.AUTHENTICATION_CLIENT
            | Gio.DBusConnectionFlags.MESSAGE_BUS_CONNECTION,
            None,
            ctx.cancellable
        )
    except GLib.Error as error:
        raise translate_error(error, "connect to system bus") from error


class BusTransport:
    """
    Wrapper over a Gio D-Bus connection.

    This is the only class touching the connection: everything else in
    this package issues D-Bus calls through it, which makes it easy to swap
    the connection for a double in tests.

    Gio connections are thread-safe, so calls may be issued concurrently
    from multiple threads. However, close() should only be called once all
    calls are done.
    """

    def __init__(self, connection: Gio.DBusConnection):
        self._connection = connection
        self._closed = False

    @classmethod
    def open(cls, ctx: CallContext) -> "BusTransport":
        """Returns a transport over a new private system bus connection."""
        return cls(open_system_bus(ctx))

    @property
    def closed(self) -> bool:
        """Returns True once close() has been called."""
        return self._closed

    def call(self, ctx: CallContext, call: DbusCall) -> Optional[GLib.Variant]:
        """
        Calls a D-Bus method.

        A single attempt is made: retrying failed calls is left to callers.

            :param ctx: context used to cancel the call or set its deadline.
            :param call: description of the call to make.
            :return: the reply if `call.reply_type` was specified,
                or None otherwise.
            :raises CancelledError: if the context was cancelled.
            :raises TimeoutError: if the context deadline was exceeded.
            :raises TransportError: if the call failed.
            :raises DecodeError: if the reply did not match `call.reply_type`.
        """
        ctx.raise_if_done()

        logger.debug("Calling %s on %s", call.method, call.object_path)
        try:
            reply = self._connection.call_sync(
                call.service,
                call.object_path,
                call.interface,
                call.member,
                call.args,
                None,
                Gio.DBusCallFlags.NONE,
                ctx.timeout_msec(),
                ctx.cancellable
            )
        except GLib.Error as error:
            raise translate_error(error, f"call {call.method!r}") from error

        if call.reply_type is None:
            return None

        try:
            return check_type(reply, call.reply_type)
        except DecodeError as error:
            raise DecodeError(f"call {call.method!r}: {error}") from error

    def close(self):
        """Closes the connection. Closing it again has no effect."""
        if self._closed:
            logger.debug("D-Bus connection already closed")
            return

        self._closed = True
        try:
            self._connection.close_sync(None)
        except GLib.Error as error:
            raise translate_error(error, "close connection") from error

        logger.debug("D-Bus connection closed")
