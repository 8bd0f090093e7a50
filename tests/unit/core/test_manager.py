"""
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
from concurrent.futures import CancelledError
from unittest.mock import Mock

import gi
gi.require_version("GLib", "2.0")  # noqa: required before importing GLib module
from gi.repository import GLib

import pytest

from networkd.core.manager import Link, ManagerProperties, ManagerService
from networkd.dbus.exceptions import DecodeError
from networkd.dbus.properties import PropertiesAdapter
from networkd.dbus.transport import BusTransport
from networkd.dbus.variant import to_property_bag
from tests.boilerplate import manager_properties_reply

ETH0_PATH = "/org/freedesktop/network1/link/_31"
LO_PATH = "/org/freedesktop/network1/link/_32"


@pytest.fixture
def transport_mock():
    return Mock()


@pytest.fixture
def properties_mock():
    return Mock()


def _property_bag(reply: GLib.Variant) -> dict:
    return to_property_bag(reply.get_child_value(0))


def test_list_links_decodes_links_in_the_order_they_were_received(
        ctx, transport_mock, properties_mock
):
    transport_mock.call.return_value = GLib.Variant("(a(iso))", ([
        (1, "eth0", ETH0_PATH),
        (2, "lo", LO_PATH),
    ], ))
    manager = ManagerService(transport_mock, properties_mock)

    links = manager.list_links(ctx)

    assert links == [Link(1, "eth0", ETH0_PATH), Link(2, "lo", LO_PATH)]
    call = transport_mock.call.call_args[0][1]
    assert call.service == "org.freedesktop.network1"
    assert call.object_path == "/org/freedesktop/network1"
    assert call.method == "org.freedesktop.network1.Manager.ListLinks"
    assert call.args is None


def test_list_links_returns_empty_list_when_there_are_no_links(
        ctx, transport_mock, properties_mock
):
    transport_mock.call.return_value = GLib.Variant("(a(iso))", ([], ))
    manager = ManagerService(transport_mock, properties_mock)

    assert manager.list_links(ctx) == []


@pytest.mark.parametrize("type_string, link_values", [
    ("(a(is))", (1, "eth0")),
    ("(a(isoi))", (1, "eth0", ETH0_PATH, 4)),
])
def test_list_links_raises_decode_error_on_invalid_number_of_link_values(
        type_string, link_values, ctx, transport_mock, properties_mock
):
    transport_mock.call.return_value = GLib.Variant(type_string, ([link_values], ))
    manager = ManagerService(transport_mock, properties_mock)

    with pytest.raises(DecodeError, match="invalid number of link values"):
        manager.list_links(ctx)


def test_list_links_raises_decode_error_on_unexpected_link_value_types(
        ctx, transport_mock, properties_mock
):
    transport_mock.call.return_value = GLib.Variant("(a(iss))", ([
        (1, "eth0", ETH0_PATH),
    ], ))
    manager = ManagerService(transport_mock, properties_mock)

    with pytest.raises(DecodeError):
        manager.list_links(ctx)


def test_list_links_through_the_bus_transport(ctx, connection_mock):
    connection_mock.call_sync.return_value = GLib.Variant("(a(iso))", ([
        (1, "eth0", ETH0_PATH),
    ], ))
    transport = BusTransport(connection_mock)
    manager = ManagerService(transport, PropertiesAdapter(transport))

    assert manager.list_links(ctx) == [Link(1, "eth0", ETH0_PATH)]


def test_list_links_does_not_call_networkd_when_context_is_cancelled(
        cancelled_ctx, connection_mock
):
    transport = BusTransport(connection_mock)
    manager = ManagerService(transport, PropertiesAdapter(transport))

    with pytest.raises(CancelledError):
        manager.list_links(cancelled_ctx)

    connection_mock.call_sync.assert_not_called()


def test_properties_maps_each_manager_property(ctx, transport_mock, properties_mock):
    properties_mock.get_all.return_value = _property_bag(manager_properties_reply())
    manager = ManagerService(transport_mock, properties_mock)

    properties = manager.properties(ctx)

    assert properties == ManagerProperties(
        operational_state="routable",
        carrier_state="carrier",
        address_state="routable",
        ipv4_address_state="routable",
        ipv6_address_state="degraded",
        online_state="online",
    )
    properties_mock.get_all.assert_called_once_with(
        ctx, "/org/freedesktop/network1", "org.freedesktop.network1.Manager"
    )


def test_properties_raises_decode_error_when_a_property_is_missing(
        ctx, transport_mock, properties_mock
):
    properties_mock.get_all.return_value = _property_bag(
        manager_properties_reply(CarrierState=None)
    )
    manager = ManagerService(transport_mock, properties_mock)

    with pytest.raises(DecodeError, match="CarrierState"):
        manager.properties(ctx)


def test_properties_raises_decode_error_when_a_property_is_not_a_string(
        ctx, transport_mock, properties_mock
):
    properties_mock.get_all.return_value = _property_bag(
        manager_properties_reply(OnlineState=GLib.Variant("u", 1))
    )
    manager = ManagerService(transport_mock, properties_mock)

    with pytest.raises(DecodeError, match="OnlineState"):
        manager.properties(ctx)


def test_properties_through_the_bus_transport(ctx, connection_mock):
    connection_mock.call_sync.return_value = manager_properties_reply()
    transport = BusTransport(connection_mock)
    manager = ManagerService(transport, PropertiesAdapter(transport))

    assert manager.properties(ctx).online_state == "online"


def test_properties_does_not_call_networkd_when_context_is_cancelled(
        cancelled_ctx, connection_mock
):
    transport = BusTransport(connection_mock)
    manager = ManagerService(transport, PropertiesAdapter(transport))

    with pytest.raises(CancelledError):
        manager.properties(cancelled_ctx)

    connection_mock.call_sync.assert_not_called()
