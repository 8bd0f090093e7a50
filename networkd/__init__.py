"""
Client library to query systemd-networkd over D-Bus.

.. code-block::
    import networkd

    try:
        client = networkd.dial()
    except Exception as error:
        if networkd.is_not_found(error):
            print("systemd-networkd is not running")
        raise

    with client:
        for link in client.list_links(networkd.CallContext(timeout=5)):
            print(link.index, link.name)


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
from networkd.context import CallContext, DEFAULT_TIMEOUT
from networkd.core import Client, Link, ManagerProperties, ManagerService, dial
from networkd.dbus.exceptions import (
    DecodeError, NetworkdError, NotFoundError, PropertyError, TransportError,
    find_cause, is_not_found
)

__all__ = [
    "CallContext", "DEFAULT_TIMEOUT",
    "Client", "Link", "ManagerProperties", "ManagerService", "dial",
    "DecodeError", "NetworkdError", "NotFoundError", "PropertyError", "TransportError",
    "find_cause", "is_not_found",
]
