"""
Cancellation and deadline handling for D-Bus calls.


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
import time
from concurrent.futures import CancelledError
from typing import Optional

import gi
gi.require_version("Gio", "2.0")  # noqa: required before importing Gio module
gi.require_version("GLib", "2.0")  # noqa: required before importing GLib module
# pylint: disable=wrong-import-position
from gi.repository import Gio, GLib

# Default amount of seconds dial() waits for systemd-networkd.
DEFAULT_TIMEOUT = 5


class CallContext:
    """
    Carries the cancellation signal and the optional deadline of one or
    more D-Bus calls.

    Cancellation is backed by a Gio.Cancellable, so that calls blocked
    on the bus are aborted as soon as cancel() is called from another
    thread. The deadline is translated into the timeout of each call.

    .. code-block::
        from networkd import CallContext, dial

        with CallContext(timeout=5) as ctx:
            with dial(ctx) as client:
                links = client.list_links(ctx)
    """

    def __init__(self, timeout: Optional[float] = None, cancellable: Gio.Cancellable = None):
        self._cancellable = cancellable or Gio.Cancellable()
        self._deadline = None
        if timeout is not None:
            self._deadline = time.monotonic() + timeout

    @classmethod
    def background(cls) -> "CallContext":
        """Returns a context without deadline, which is only done once cancelled."""
        return cls()

    def __enter__(self) -> "CallContext":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.cancel()

    @property
    def cancellable(self) -> Gio.Cancellable:
        """Returns the Gio.Cancellable to pass to Gio operations."""
        return self._cancellable

    @property
    def deadline(self) -> Optional[float]:
        """Returns the deadline as a time.monotonic() value, if any."""
        return self._deadline

    @property
    def cancelled(self) -> bool:
        """Returns True if cancel() was called."""
        return self._cancellable.is_cancelled()

    @property
    def expired(self) -> bool:
        """Returns True if the deadline has been reached."""
        return self._deadline is not None and time.monotonic() >= self._deadline

    def cancel(self):
        """Cancels the context, aborting any in-flight call using it."""
        self._cancellable.cancel()

    def raise_if_done(self):
        """
        :raises CancelledError: if the context was cancelled.
        :raises TimeoutError: if the deadline was reached.
        """
        if self.cancelled:
            raise CancelledError("context cancelled")
        if self.expired:
            raise TimeoutError("context deadline exceeded")

    def timeout_msec(self) -> int:
        """
        Returns the milliseconds left until the deadline, or GLib.MAXINT
        (no timeout for Gio) when there isn't a deadline.
        """
        if self._deadline is None:
            return GLib.MAXINT

        remaining = int((self._deadline - time.monotonic()) * 1000)
        return max(remaining, 1)
