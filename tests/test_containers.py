import pytest

from elementsorter.ordering.containers import ListContainer
from elementsorter.ordering.errors import ReferenceNotFoundError


def test_append_and_insert_before():
    c = ListContainer()
    c.append_child("a")
    c.insert_before("b", "a")
    c.insert_before("c", None)
    assert c.children() == ["b", "a", "c"]
    assert c.move_count == 3


def test_insert_existing_moves_it():
    c = ListContainer(["a", "b", "c"])
    c.insert_before("c", "a")
    assert c.children() == ["c", "a", "b"]
    c.insert_before("c", None)
    assert c.children() == ["a", "b", "c"]
    assert len(c) == 3


def test_insert_before_itself_is_noop_placement():
    c = ListContainer(["a", "b"])
    c.insert_before("b", "b")
    assert c.children() == ["a", "b"]
    assert c.move_count == 1


def test_unknown_reference_raises_and_keeps_children():
    c = ListContainer(["a", "b"])
    with pytest.raises(ReferenceNotFoundError):
        c.insert_before("a", "zzz")
    assert c.children() == ["a", "b"]
    assert "zzz" not in c


def test_identity_not_equality():
    first, second = [1], [1]
    c = ListContainer([first])
    c.append_child(second)
    assert len(c) == 2
    c.insert_before(second, first)
    assert c.children()[0] is second


def test_reset_move_count():
    c = ListContainer()
    c.append_child("x")
    c.reset_move_count()
    assert c.move_count == 0
