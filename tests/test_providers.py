"""
Test Invariant Providers
Tests the optional provider slot: empty by default, filled on register.
"""

import pytest

from skein import providers
from skein.errors import ProviderUnavailableError
from skein.records import make_record


class FakeProvider(providers.InvariantProvider):
    name = "fake"

    def to_external(self, g):
        return ("pd", tuple(g))

    def from_external(self, diagram):
        from skein.gauss_code import GaussCode
        return GaussCode(list(diagram[1]))

    def jones_polynomial(self, g):
        return f"V(n={len(g) // 2})"


class BrokenProvider(providers.InvariantProvider):
    name = "broken"

    def jones_polynomial(self, g):
        raise RuntimeError("backend exploded")


def test_empty_slot(trefoil):
    assert not providers.is_available()
    assert providers.get_provider() is None
    assert providers.richer_invariant(trefoil) is None


def test_conversions_need_a_provider(trefoil):
    with pytest.raises(ProviderUnavailableError):
        providers.to_external(trefoil)
    with pytest.raises(ProviderUnavailableError):
        providers.from_external(("pd", ()))


def test_registered_provider(trefoil):
    fake = FakeProvider()
    providers.register_provider(fake)
    assert providers.is_available()
    assert providers.get_provider() is fake
    assert providers.richer_invariant(trefoil) == "V(n=3)"

    diagram = providers.to_external(trefoil)
    assert providers.from_external(diagram) == trefoil


def test_unregister(trefoil):
    providers.register_provider(FakeProvider())
    providers.unregister_provider()
    assert not providers.is_available()


def test_missing_hook_is_none(trefoil):
    providers.register_provider(providers.InvariantProvider())
    assert providers.richer_invariant(trefoil) is None
    with pytest.raises(NotImplementedError):
        providers.to_external(trefoil)


def test_provider_errors_propagate(trefoil):
    providers.register_provider(BrokenProvider())
    with pytest.raises(RuntimeError, match="backend exploded"):
        providers.richer_invariant(trefoil)


def test_make_record_uses_provider(trefoil):
    assert make_record("trefoil", trefoil).jones_polynomial is None
    providers.register_provider(FakeProvider())
    assert make_record("trefoil", trefoil).jones_polynomial == "V(n=3)"


def test_stored_jones(db, trefoil):
    providers.register_provider(FakeProvider())
    db.store("trefoil", trefoil)
    providers.unregister_provider()
    assert db.fetch("trefoil").jones_polynomial == "V(n=3)"


class FakeEntryPoint:
    def __init__(self, name, factory=None, error=None):
        self.name = name
        self._factory = factory
        self._error = error

    def load(self):
        if self._error is not None:
            raise self._error
        return self._factory


def _undiscovered(monkeypatch, found):
    monkeypatch.setattr(providers, "_provider", None)
    monkeypatch.setattr(providers, "_discovered", False)
    groups = []

    def fake_entry_points(group):
        groups.append(group)
        return found

    monkeypatch.setattr(providers, "entry_points", fake_entry_points)
    return groups


def test_discovers_entry_point(monkeypatch, trefoil):
    groups = _undiscovered(monkeypatch, [FakeEntryPoint("fake", factory=FakeProvider)])
    assert providers.is_available()
    assert isinstance(providers.get_provider(), FakeProvider)
    assert groups == ["skein.providers"]
    assert providers.richer_invariant(trefoil) == "V(n=3)"


def test_discovery_skips_unimportable(monkeypatch):
    _undiscovered(monkeypatch, [
        FakeEntryPoint("missing", error=ImportError("no module named knotlib")),
        FakeEntryPoint("fake", factory=FakeProvider),
    ])
    assert isinstance(providers.get_provider(), FakeProvider)


def test_discovery_empty_group(monkeypatch):
    groups = _undiscovered(monkeypatch, [])
    assert providers.get_provider() is None
    assert not providers.is_available()
    assert groups == ["skein.providers"]


def test_discovery_runs_once(monkeypatch):
    groups = _undiscovered(monkeypatch, [])
    providers.get_provider()
    providers.get_provider()
    assert len(groups) == 1


def test_registered_provider_wins_over_discovery(monkeypatch):
    groups = _undiscovered(monkeypatch, [FakeEntryPoint("fake", factory=FakeProvider)])
    broken = BrokenProvider()
    providers.register_provider(broken)
    assert providers.get_provider() is broken
    assert groups == []
