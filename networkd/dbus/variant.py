"""
Typed extraction of values from D-Bus replies.


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
from typing import Any, Dict

import gi
gi.require_version("GLib", "2.0")  # noqa: required before importing GLib module
# pylint: disable=wrong-import-position
from gi.repository import GLib

from networkd.dbus.exceptions import DecodeError


def check_type(value: GLib.Variant, type_string: str) -> GLib.Variant:
    """
    Checks that a variant matches the specified D-Bus type.

        :param value: variant to check.
        :param type_string: D-Bus type string. Indefinite types like `(ar)`
            or `a*` are accepted.
        :return: the variant that was passed.
        :raises DecodeError: if the variant does not match the type.
    """
    if not isinstance(value, GLib.Variant):
        raise DecodeError(f"expected D-Bus value of type {type_string!r}, got {value!r}")

    if not value.is_of_type(GLib.VariantType.new(type_string)):
        raise DecodeError(
            f"expected D-Bus value of type {type_string!r}, "
            f"got {value.get_type_string()!r}"
        )

    return value


def unpack_as(value: GLib.Variant, type_string: str) -> Any:
    """Unpacks a variant into a python object after checking its type."""
    return check_type(value, type_string).unpack()


def unbox(value: GLib.Variant) -> GLib.Variant:
    """Returns the value boxed inside a `v` variant."""
    return check_type(value, "v").get_variant()


def to_property_bag(value: GLib.Variant) -> Dict[str, GLib.Variant]:
    """
    Converts an `a{sv}` variant into a dict mapping each property
    name to its (still typed) value.
    """
    check_type(value, "a{sv}")
    properties = {}
    for i in range(value.n_children()):
        entry = value.get_child_value(i)
        name = entry.get_child_value(0).get_string()
        properties[name] = unbox(entry.get_child_value(1))

    return properties
