import json
import logging

import pytest

from elementsorter.ordering.containers import ListContainer
from elementsorter.ordering.element_sorter import SortedElementList
from elementsorter.ordering.field_compare import compare_values
from elementsorter.services.logging_service import OrderingLogService
from tests.factories import ids, node_to_item


@pytest.fixture()
def ordering_log():
    svc = OrderingLogService(capacity=5)
    svc.attach()
    yield svc
    svc.detach()


def test_insert_and_resort_events(ordering_log, nodes):
    rows = SortedElementList(ListContainer(), node_to_item, "id", elements=nodes)
    rows.set_order("type DESC")
    assert ids(rows) == [1, 2, 5, 3, 6, 9]

    insert, = ordering_log.events("insert")
    assert (insert.operation, insert.order_expression, insert.element_count) == ("insert", "id", 6)
    resort = ordering_log.last_resort()
    assert resort is not None
    assert resort.order_expression == "type DESC"
    assert resort.moves == 5
    assert resort.message == "Resorted 6 element(s) by 'type DESC' with 5 move(s)"
    assert ordering_log.total_moves("resort") == 5
    assert ordering_log.total_moves() == 11  # 6 placements + 5 moves


def test_plain_records_have_no_operation(ordering_log):
    compare_values("abc", 5)
    event, = ordering_log.events()
    assert event.operation is None and event.moves is None
    assert event.logger == "elementsorter.ordering.field_compare"


def test_capacity_keeps_latest_resorts(ordering_log, nodes):
    rows = SortedElementList(ListContainer(), node_to_item, "id", elements=nodes)
    for order in ["id DESC", "type", "checked", "type DESC", "id", "checked DESC"]:
        rows.set_order(order)
    assert len(ordering_log.events()) == 5
    assert [e.order_expression for e in ordering_log.events(limit=2)] == ["id", "checked DESC"]
    assert ordering_log.events("insert") == []


def test_ignores_other_loggers(ordering_log):
    logging.getLogger("unrelated").warning("outside")
    assert ordering_log.events() == []


def test_detach_restores_level():
    logger = logging.getLogger("elementsorter")
    before = logger.level
    svc = OrderingLogService()
    svc.attach()
    assert svc.attached and logger.level == logging.DEBUG
    svc.detach()
    assert not svc.attached
    assert logger.level == before


def test_export_jsonl(ordering_log, nodes, tmp_path):
    rows = SortedElementList(ListContainer(), node_to_item, "id", elements=nodes)
    rows.set_order("id DESC")
    out = tmp_path / "ordering.jsonl"
    assert ordering_log.export_jsonl(out, operation="resort") == 1
    line = json.loads(out.read_text(encoding="utf-8"))
    assert line["moves"] == 5 and line["order_expression"] == "id DESC"
    ordering_log.clear()
    assert ordering_log.events() == []
