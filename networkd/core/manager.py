"""
Methods and properties of the systemd-networkd Manager object.


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
from dataclasses import dataclass
from typing import List

from networkd.context import CallContext
from networkd.dbus.exceptions import DecodeError
from networkd.dbus.paths import BASE_SERVICE, MANAGER_INTERFACE, MANAGER_OBJECT
from networkd.dbus.properties import PropertiesAdapter
from networkd.dbus.transport import BusTransport, DbusCall
from networkd.dbus.variant import unpack_as

logger = logging.getLogger(__name__)

# Number of values describing each link returned by ListLinks.
LINK_VALUES = 3


@dataclass(frozen=True)
class Link:
    """A network link known to systemd-networkd."""
    index: int
    name: str
    object_path: str


@dataclass(frozen=True)
class ManagerProperties:
    """D-Bus properties of the networkd Manager object."""
    operational_state: str
    carrier_state: str
    address_state: str
    ipv4_address_state: str
    ipv6_address_state: str
    online_state: str


# Maps each ManagerProperties field to its D-Bus property name.
_MANAGER_PROPERTY_NAMES = {
    "operational_state": "OperationalState",
    "carrier_state": "CarrierState",
    "address_state": "AddressState",
    "ipv4_address_state": "IPv4AddressState",
    "ipv6_address_state": "IPv6AddressState",
    "online_state": "OnlineState",
}


class ManagerService:
    """
    Exposes methods and properties of the networkd Manager object,
    `/org/freedesktop/network1`.
    """

    def __init__(self, transport: BusTransport, properties: PropertiesAdapter):
        self._transport = transport
        self._properties = properties

    def properties(self, ctx: CallContext) -> ManagerProperties:
        """
        Fetches all the D-Bus properties of the Manager object.

            :param ctx: context used to cancel the call or set its deadline.
            :return: the Manager properties.
            :raises DecodeError: if any of the properties is missing or
                is not a string.
        """
        properties = self._properties.get_all(ctx, MANAGER_OBJECT, MANAGER_INTERFACE)

        values = {}
        for field, property_name in _MANAGER_PROPERTY_NAMES.items():
            if property_name not in properties:
                raise DecodeError(f"missing Manager property {property_name!r}")
            try:
                values[field] = unpack_as(properties[property_name], "s")
            except DecodeError as error:
                raise DecodeError(f"Manager property {property_name!r}: {error}") from error

        return ManagerProperties(**values)

    def list_links(self, ctx: CallContext) -> List[Link]:
        """
        Lists all the network links known to systemd-networkd, in the
        order they were returned by the daemon.

            :param ctx: context used to cancel the call or set its deadline.
            :return: the list of links.
            :raises DecodeError: if any of the links could not be decoded.
                In this case no links are returned.
        """
        reply = self._transport.call(ctx, DbusCall(
            service=BASE_SERVICE,
            object_path=MANAGER_OBJECT,
            method=f"{MANAGER_INTERFACE}.ListLinks",
            reply_type="(ar)"
        ))

        values = reply.get_child_value(0)
        links = []
        for i in range(values.n_children()):
            link_values = values.get_child_value(i)
            if link_values.n_children() != LINK_VALUES:
                raise DecodeError(
                    f"invalid number of link values: {link_values.n_children()}"
                )

            links.append(Link(
                index=unpack_as(link_values.get_child_value(0), "i"),
                name=unpack_as(link_values.get_child_value(1), "s"),
                object_path=unpack_as(link_values.get_child_value(2), "o"),
            ))

        logger.debug("networkd returned %d links", len(links))
        return links
