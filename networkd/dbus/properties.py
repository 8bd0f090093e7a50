"""
Access to the D-Bus properties of systemd-networkd objects.


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
from typing import Dict

import gi
gi.require_version("GLib", "2.0")  # noqa: required before importing GLib module
# pylint: disable=wrong-import-position
from gi.repository import GLib

from networkd.context import CallContext
from networkd.dbus.exceptions import NetworkdError, PropertyError
from networkd.dbus.paths import BASE_SERVICE, METHOD_GET, METHOD_GET_ALL
from networkd.dbus.transport import BusTransport, DbusCall
from networkd.dbus.variant import to_property_bag, unbox


class PropertiesAdapter:
    """
    Fetches properties through the org.freedesktop.DBus.Properties
    interface of networkd objects.

    Failures are raised as PropertyError, chained to the original error.
    Cancellation and timeout errors are propagated as they are.
    """

    def __init__(self, transport: BusTransport):
        self._transport = transport

    def get(
            self, ctx: CallContext, object_path: str, interface: str, property_name: str
    ) -> GLib.Variant:
        """
            :param ctx: context used to cancel the call or set its deadline.
            :param object_path: object the property belongs to.
            :param interface: interface the property belongs to.
            :param property_name: name of the property to get.
            :return: the value of the property.
        """
        try:
            reply = self._transport.call(ctx, DbusCall(
                service=BASE_SERVICE,
                object_path=object_path,
                method=METHOD_GET,
                args=GLib.Variant("(ss)", (interface, property_name)),
                reply_type="(v)"
            ))
            return unbox(reply.get_child_value(0))
        except NetworkdError as error:
            raise PropertyError(
                f"get property {property_name!r} for {interface!r}: {error}"
            ) from error

    def get_all(
            self, ctx: CallContext, object_path: str, interface: str
    ) -> Dict[str, GLib.Variant]:
        """
            :param ctx: context used to cancel the call or set its deadline.
            :param object_path: object the properties belong to.
            :param interface: interface the properties belong to.
            :return: the properties, mapped by name.
        """
        try:
            reply = self._transport.call(ctx, DbusCall(
                service=BASE_SERVICE,
                object_path=object_path,
                method=METHOD_GET_ALL,
                args=GLib.Variant("(s)", (interface, )),
                reply_type="(a{sv})"
            ))
            return to_property_bag(reply.get_child_value(0))
        except NetworkdError as error:
            raise PropertyError(
                f"get all properties for {interface!r}: {error}"
            ) from error
