import random

import pytest

from elementsorter.ordering.containers import ListContainer
from elementsorter.ordering.element_sorter import insert_elements
from elementsorter.ordering.object_sorter import is_sorted
from elementsorter.ordering.sort_spec import parse_order_expression
from tests.factories import Node, ids, node_to_item


def _insert(container, last, add, fields):
    insert_elements(container, last, add, fields, node_to_item)


def test_order_by_id(nodes):
    container = ListContainer()
    last = []
    fields = parse_order_expression("id")

    _insert(container, last, [nodes[0]], fields)
    assert ids(container.children()) == [5]
    _insert(container, last, [nodes[3]], fields)
    assert ids(container.children()) == [5, 6]
    _insert(container, last, [nodes[5]], fields)
    assert ids(container.children()) == [3, 5, 6]
    _insert(container, last, [nodes[2], nodes[1], nodes[4]], fields)
    assert ids(container.children()) == [1, 2, 3, 5, 6, 9]
    assert ids(last) == [1, 2, 3, 5, 6, 9]


def test_order_by_id_desc(nodes):
    container = ListContainer()
    last = []
    fields = parse_order_expression("id DESC")

    _insert(container, last, [nodes[0]], fields)
    assert ids(container.children()) == [5]
    _insert(container, last, [nodes[3]], fields)
    assert ids(container.children()) == [6, 5]
    _insert(container, last, [nodes[5]], fields)
    assert ids(container.children()) == [6, 5, 3]
    _insert(container, last, [nodes[2], nodes[1], nodes[4]], fields)
    assert ids(container.children()) == [9, 6, 5, 3, 2, 1]


def test_order_by_three_keys(nodes):
    container = ListContainer()
    last = []
    _insert(container, last, nodes, parse_order_expression("checked, type DESC, id"))
    # unchecked first; within each group foo before bar; then id ascending
    assert ids(container.children()) == [1, 5, 9, 2, 3, 6]


def test_empty_fields_keep_arrival_order(nodes):
    container = ListContainer()
    last = []
    _insert(container, last, nodes, ())
    assert ids(container.children()) == [5, 2, 1, 6, 9, 3]


def test_equal_items_keep_arrival_order():
    a, b, c = Node(id=1, type="x"), Node(id=2, type="x"), Node(id=3, type="a")
    container = ListContainer()
    last = []
    _insert(container, last, [a, b, c], parse_order_expression("type"))
    assert container.children() == [c, a, b]


def test_sortedness_invariant_random_batches():
    rng = random.Random(7)
    fields = parse_order_expression("type, checked DESC, id")
    container = ListContainer()
    last = []
    for batch in range(10):
        add = [
            Node(
                id=rng.randint(0, 50),
                type=rng.choice(["a", "b", "c"]),
                checked=rng.choice(["true", "false"]),
            )
            for _ in range(rng.randint(0, 5))
        ]
        _insert(container, last, add, fields)
        assert is_sorted([node_to_item(n) for n in last], fields)
        assert container.children() == last


def test_mapper_error_propagates_after_partial_insert():
    good = Node(id=1)
    bad = Node(type="no-id")
    container = ListContainer()
    last = []
    with pytest.raises(KeyError):
        _insert(container, last, [good, bad], parse_order_expression("id"))
    assert last == [good]
    assert container.children() == [good]
