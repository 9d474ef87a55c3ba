import pytest

from backoffice.banner_sort import INACTIVE_SORT_ORDER, BannerSorter, sort_banners
from tests.conftest import json_body

IMAGE = {"file_name": "d_a.webp", "file_url": "https://cdn.example.com/d_a.webp"}


def banner(banner_id, sort_order, status="active", created_at="2024-01-01T00:00:00Z"):
    return {
        "banner_id": banner_id,
        "title": banner_id,
        "desktop_image_url": IMAGE,
        "mobile_image_url": IMAGE,
        "redirect_url": "https://shop.example.com",
        "sort_order": sort_order,
        "banner_status": status,
        "created_at": created_at,
    }


class Recorder:
    def __init__(self, fail_on=None):
        self.fail_on = fail_on
        self.sent = []

    def __call__(self, data):
        self.sent.append(data)
        return data["banner_id"] != self.fail_on


@pytest.fixture
def active():
    return [banner("b", 2), banner("a", 1), banner("c", 3)]


def ids(banners):
    return [b["banner_id"] for b in banners]


def test_sort_uses_order_then_creation_time():
    banners = [
        banner("late", 1, created_at="2024-02-01T00:00:00Z"),
        banner("early", 1, created_at="2024-01-01T00:00:00Z"),
        banner("zero", 0),
    ]
    assert ids(sort_banners(banners)) == ["zero", "early", "late"]


def test_reorder_writes_only_moved_banners(ctx, active):
    update = Recorder()
    sorter = BannerSorter(ctx, active, [], update=update)
    assert ids(sorter.active) == ["a", "b", "c"]

    a, b, c = sorter.active
    assert sorter.reorder([b, a, c])

    assert [(s["banner_id"], s["sort_order"]) for s in update.sent] == [("b", 1), ("a", 2)]
    assert [(x["banner_id"], x["sort_order"]) for x in sorter.active] == [("b", 1), ("a", 2), ("c", 3)]
    assert ctx.notifier.pending[-1].description == "Banner order saved"
    assert not sorter.busy


def test_failed_reorder_restores_original_order(ctx, active):
    sorter = BannerSorter(ctx, active, [], update=Recorder(fail_on="a"))
    a, b, c = sorter.active
    assert not sorter.reorder([c, a, b])

    assert ids(sorter.active) == ["a", "b", "c"]
    note = ctx.notifier.pending[-1]
    assert (note.title, note.description) == ("Failed to reorder banners", "The original order has been restored")


def test_promote_appends_to_active(ctx, active):
    winter = banner("w", INACTIVE_SORT_ORDER, "inactive")
    update = Recorder()
    sorter = BannerSorter(ctx, active, [winter], update=update)

    assert sorter.promote(winter)
    assert update.sent == [dict(winter, banner_status="active", sort_order=4)]
    assert ids(sorter.active) == ["a", "b", "c", "w"]
    assert sorter.inactive == []


def test_demote_closes_the_gap(ctx, active):
    update = Recorder()
    sorter = BannerSorter(ctx, active, [], update=update)
    a, b, c = sorter.active

    assert sorter.demote(a)
    assert [(s["banner_id"], s["sort_order"]) for s in update.sent] == [
        ("a", INACTIVE_SORT_ORDER), ("b", 1), ("c", 2),
    ]
    assert [(x["banner_id"], x["sort_order"]) for x in sorter.active] == [("b", 1), ("c", 2)]
    assert sorter.inactive[0]["banner_status"] == "inactive"


def test_failed_demote_keeps_banner_active(ctx, active):
    sorter = BannerSorter(ctx, active, [], update=Recorder(fail_on="c"))
    a, _, _ = sorter.active
    assert not sorter.demote(a)
    assert ids(sorter.active) == ["a", "b", "c"]
    assert ctx.notifier.pending[-1].description == "Failed to deactivate banner"


def test_second_operation_is_rejected_while_one_runs(ctx, active):
    sorter = BannerSorter(ctx, active, [], update=Recorder())
    sorter.operation = "reorder"

    assert not sorter.promote(banner("w", INACTIVE_SORT_ORDER, "inactive"))
    note = ctx.notifier.pending[-1]
    assert note.title == "Please wait"
    assert note.description == "Another banner operation is still running; try activating again shortly"


def test_default_update_goes_through_the_banner_endpoint(ctx, api, active):
    api.on("PUT", "/admin/banners", body={"code": 200, "msg": "ok"})
    sorter = BannerSorter(ctx, active, [])
    a, b, c = sorter.active

    assert sorter.reorder([a, c, b])

    sent = [json_body(r) for r in api.calls("PUT", "/admin/banners")]
    assert [(s["banner_id"], s["sort_order"]) for s in sent] == [("c", 2), ("b", 3)]
    # Individual updates stay quiet; only the summary is shown.
    assert [n.description for n in ctx.notifier.pending] == ["Banner order saved"]


def test_missing_sort_order_sorts_first(ctx):
    banners = [banner("b", 1), dict(banner("new", 1), sort_order=None)]
    assert ids(sort_banners(banners)) == ["new", "b"]

    sorter = BannerSorter(ctx, banners, [], update=Recorder())
    assert sorter.demote(sorter.active[1])
    assert ids(sorter.active) == ["new"]
