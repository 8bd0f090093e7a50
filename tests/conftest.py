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
from unittest.mock import Mock

import pytest

from networkd.context import CallContext


@pytest.fixture
def ctx():
    with CallContext(timeout=5) as context:
        yield context


@pytest.fixture
def cancelled_ctx():
    context = CallContext()
    context.cancel()
    return context


@pytest.fixture
def connection_mock():
    return Mock()
