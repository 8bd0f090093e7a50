"""
Client to query systemd-networkd over D-Bus.


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
from typing import List, Optional

from networkd.context import CallContext, DEFAULT_TIMEOUT
from networkd.core.manager import Link, ManagerService
from networkd.dbus.exceptions import normalize_not_found
from networkd.dbus.paths import MANAGER_INTERFACE, MANAGER_OBJECT
from networkd.dbus.properties import PropertiesAdapter
from networkd.dbus.transport import BusTransport

logger = logging.getLogger(__name__)

# Manager property read to check that networkd can be reached.
PROBE_PROPERTY = "OnlineState"


class Client:
    """
    Issues D-Bus requests to systemd-networkd.

    Clients are meant to be obtained with dial(), which checks that
    networkd is reachable before returning one.

    .. code-block::
        from networkd import CallContext, dial

        ctx = CallContext(timeout=5)
        with dial(ctx) as client:
            state = client.manager.properties(ctx)
    """

    def __init__(self, transport: BusTransport, properties: PropertiesAdapter = None):
        self._transport = transport
        self._properties = properties or PropertiesAdapter(transport)
        self.manager = ManagerService(self._transport, self._properties)

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def list_links(self, ctx: CallContext) -> List[Link]:
        """Lists all the network links known to systemd-networkd."""
        return self.manager.list_links(ctx)

    def close(self):
        """Closes the underlying D-Bus connection."""
        self._transport.close()

    def probe(self, ctx: CallContext):
        """
        Checks that the networkd Manager object is available on the bus.

            :raises NotFoundError: if networkd is not available.
        """
        try:
            self._properties.get(ctx, MANAGER_OBJECT, MANAGER_INTERFACE, PROBE_PROPERTY)
        except Exception as error:
            normalized_error = normalize_not_found(error)
            if normalized_error is error:
                raise
            raise normalized_error from error


def dial(
        ctx: Optional[CallContext] = None, transport: Optional[BusTransport] = None
) -> Client:
    """
    Connects to the system bus and returns a Client to talk to
    systemd-networkd.

        :param ctx: context used to cancel the operation. If not specified,
            the operation times out after DEFAULT_TIMEOUT seconds.
        :param transport: transport to use instead of opening a new
            system bus connection.
        :return: a client ready to be used.
        :raises NotFoundError: if networkd does not exist on the system bus.
    """
    ctx = ctx or CallContext(timeout=DEFAULT_TIMEOUT)
    transport = transport or BusTransport.open(ctx)

    client = Client(transport)
    try:
        client.probe(ctx)
    except BaseException:
        try:
            transport.close()
        except Exception as close_error:  # pylint: disable=broad-except
            logger.warning("Error closing D-Bus connection after failed probe: %s", close_error)
        raise

    logger.debug("Connected to systemd-networkd")
    return client
