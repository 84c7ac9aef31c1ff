# tests/test_filtering.py
from factories import make_shipment

from packtrack.models import ShipmentDirection, ShipmentStatus
from packtrack.services.filtering import (
    build_overview,
    cleanup_eligible_count,
    filter_shipments,
    is_completed,
    partition,
)


def _dashboard():
    return [
        make_shipment(id="a", item_name="Nike Air Max 90", status=ShipmentStatus.READY_FOR_PICKUP),
        make_shipment(id="b", item_name="Levi's Jacket", status=ShipmentStatus.IN_TRANSIT, tracking_code="MR-2849301847"),
        make_shipment(id="c", item_name="Handbag", status=ShipmentStatus.DELIVERED),
        make_shipment(
            id="d",
            item_name="Zara trousers",
            status=ShipmentStatus.AWAITING_DROPOFF,
            direction=ShipmentDirection.OUTGOING,
        ),
        make_shipment(id="e", item_name="Old sneakers", status=ShipmentStatus.DELIVERED, archived=True),
        make_shipment(
            id="f",
            item_name="Sold book",
            status=ShipmentStatus.SHIPPED,
            direction=ShipmentDirection.OUTGOING,
        ),
    ]


def test_completed_statuses():
    assert is_completed(ShipmentStatus.DELIVERED)
    assert is_completed("picked-up")
    assert is_completed(ShipmentStatus.SHIPPED)
    assert not is_completed(ShipmentStatus.READY_FOR_PICKUP)
    assert not is_completed(ShipmentStatus.EXCEPTION)


def test_partition_keeps_order():
    active, archived = partition(_dashboard())
    assert [s.id for s in active] == ["a", "b", "c", "d", "f"]
    assert [s.id for s in archived] == ["e"]


def test_filter_by_direction_status_and_query():
    active, _ = partition(_dashboard())

    assert [s.id for s in filter_shipments(active, direction="outgoing")] == ["d", "f"]
    assert [s.id for s in filter_shipments(active, status="delivered")] == ["c"]
    assert [s.id for s in filter_shipments(active, direction="incoming", status="awaiting-dropoff")] == []
    # Search is case-insensitive over item name and tracking code
    assert [s.id for s in filter_shipments(active, query="nike")] == ["a"]
    assert [s.id for s in filter_shipments(active, query="mr-2849")] == ["b"]


def test_all_filters_return_everything():
    active, _ = partition(_dashboard())
    assert filter_shipments(active, "all", "all", "") == active


def test_cleanup_count_ignores_archived():
    assert cleanup_eligible_count(_dashboard()) == 2


def test_overview_active_view():
    overview = build_overview(_dashboard())

    assert [s.id for s in overview.shipments] == ["a", "b", "c", "d", "f"]
    assert overview.stats.total == 5
    assert overview.stats.incoming == 3
    assert overview.stats.outgoing == 2
    assert overview.stats.in_transit == 1
    assert overview.stats.pickup == 1
    assert overview.stats.delivered == 1
    assert overview.stats.archived == 1
    assert overview.cleanup_count == 2
    assert overview.show_archived is False


def test_overview_archived_view_counts_archived_base():
    overview = build_overview(_dashboard(), show_archived=True)

    assert [s.id for s in overview.shipments] == ["e"]
    assert overview.stats.total == 1
    assert overview.stats.delivered == 1
    assert overview.stats.archived == 1


def test_stats_do_not_follow_the_filter():
    overview = build_overview(_dashboard(), direction="outgoing", query="book")

    assert [s.id for s in overview.shipments] == ["f"]
    assert overview.stats.total == 5
