"""
Test KnotRecord
Tests record construction, its dict form and hashing.
"""

import dataclasses

import pytest

from skein.invariants import gauss_hash
from skein.records import make_record


def test_make_record(trefoil):
    record = make_record("trefoil", trefoil, metadata={"crossings": 3})
    assert record.crossing_number == 3
    assert record.writhe == 1
    assert record.gauss_hash == gauss_hash(trefoil)
    assert record.metadata == {"crossings": "3"}
    assert record.created_at == record.updated_at
    assert repr(record) == "KnotRecord('trefoil', crossings=3)"


def test_ids_are_unique(trefoil):
    assert make_record("a", trefoil).id != make_record("a", trefoil).id


def test_to_dict(trefoil):
    d = make_record("trefoil", trefoil, metadata={"family": "torus"}).to_dict()
    assert d["gauss_code"] == [1, -2, 3, -1, 2, -3]
    assert d["metadata"] == {"family": "torus"}
    assert isinstance(d["created_at"], str)


def test_hashable_with_metadata(trefoil):
    record = make_record("trefoil", trefoil, metadata={"family": "torus"})
    assert hash(record) == hash(dataclasses.replace(record))
    assert len({record, dataclasses.replace(record)}) == 1


def test_frozen(trefoil):
    record = make_record("trefoil", trefoil)
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.name = "other"
