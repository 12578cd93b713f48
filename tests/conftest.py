"""Shared fixtures for the skein tests."""

import pytest

from skein import providers
from skein.gauss_code import GaussCode
from skein.import_export import import_knot_table
from skein.storage import SkeinDB


@pytest.fixture
def trefoil():
    return GaussCode([1, -2, 3, -1, 2, -3])


@pytest.fixture
def figure_eight():
    return GaussCode([1, -2, 3, -4, 2, -1, 4, -3])


@pytest.fixture
def unknot():
    return GaussCode([])


@pytest.fixture
def db():
    database = SkeinDB(":memory:")
    yield database
    database.close()


@pytest.fixture
def seeded_path(tmp_path):
    """A file database holding the prime knot table, closed and ready to reopen."""
    path = tmp_path / "knots.db"
    with SkeinDB(path) as database:
        import_knot_table(database)
    return path


@pytest.fixture(autouse=True)
def empty_provider_slot():
    providers.unregister_provider()
    yield
    providers.unregister_provider()
