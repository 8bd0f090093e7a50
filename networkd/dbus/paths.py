"""
Object paths and interface names used to talk to systemd-networkd.


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
import posixpath

import gi
gi.require_version("GLib", "2.0")  # noqa: required before importing GLib module
# pylint: disable=wrong-import-position
from gi.repository import GLib

# Well-known bus name of systemd-networkd. It doubles as the base of
# all the interface names exposed by the daemon.
BASE_SERVICE = "org.freedesktop.network1"

# Object path every networkd object lives under.
BASE_OBJECT = "/org/freedesktop/network1"

PROPERTIES_INTERFACE = "org.freedesktop.DBus.Properties"

# Fetches a single D-Bus property by name.
METHOD_GET = PROPERTIES_INTERFACE + ".Get"

# Fetches all of an object's D-Bus properties.
METHOD_GET_ALL = PROPERTIES_INTERFACE + ".GetAll"


def object_path(*segments: str) -> str:
    """
    Prepends the networkd base object path to the specified segments.

        :param segments: path elements to append to the base object path.
        :return: the resulting D-Bus object path.
        :raises AssertionError: if the result is not a valid object path.

    The paths built by this package are effectively constant, so a bad
    one is a bug in this package rather than a runtime condition.
    """
    path = posixpath.normpath("/".join((BASE_OBJECT, ) + segments))
    if not GLib.Variant.is_object_path(path):
        raise AssertionError(f"networkd: bad D-Bus object path: {path!r}")

    return path


def interface_name(*segments: str) -> str:
    """
    Prepends the networkd base interface name to the specified segments.

        :param segments: name elements to append to the base name.
        :return: the resulting D-Bus interface name.
    """
    return ".".join((BASE_SERVICE, ) + segments)


MANAGER_OBJECT = object_path()
MANAGER_INTERFACE = interface_name("Manager")
