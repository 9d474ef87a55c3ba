from backoffice.table import from_api_sorting, page_count, to_api_sorting


def test_first_sorted_column_becomes_api_params():
    sorting = [{"id": "total_spent", "desc": True}, {"id": "order_count", "desc": False}]
    assert to_api_sorting(sorting) == {"sort_by": "total_spent", "order": "DESC"}
    assert to_api_sorting([{"id": "tag_name"}]) == {"sort_by": "tag_name", "order": "ASC"}


def test_empty_sorting_sends_nothing():
    assert to_api_sorting([]) == {}
    assert from_api_sorting(None) == []
    assert from_api_sorting({"order": "DESC"}) == []


def test_api_params_back_to_table_state():
    assert from_api_sorting({"sort_by": "tag_id", "order": "DESC"}) == [{"id": "tag_id", "desc": True}]
    assert from_api_sorting({"sort_by": "tag_id"}) == [{"id": "tag_id", "desc": False}]


def test_page_count():
    assert page_count(0, 20) == 1
    assert page_count(None, 20) == 1
    assert page_count(20, 20) == 1
    assert page_count(21, 20) == 2
    assert page_count("45", 10) == 5
