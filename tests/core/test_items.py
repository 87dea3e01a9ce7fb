from conftest import Track, offset_payload

from pypager import OffsetPage, filter_present


class TestFilterPresent:
    def test_drops_only_none(self):
        assert filter_present(["a", None, "b", None]) == ["a", "b"]

    def test_keeps_falsy_values(self):
        assert filter_present([0, None, "", False]) == [0, "", False]

    def test_empty(self):
        assert filter_present([]) == []


class TestFilteredItems:
    def test_preserves_order_and_drops_holes(self):
        page = OffsetPage[Track].model_validate(offset_payload(0, ["a", None, "b"], total=3, limit=3))
        assert [t.name for t in page.filtered_items()] == ["a", "b"]

    def test_is_repeatable_and_leaves_page_untouched(self):
        page = OffsetPage[Track].model_validate(offset_payload(0, ["a", None, "b"], total=3, limit=3))
        first = page.filtered_items()
        second = page.filtered_items()
        assert first == second
        assert len(page.items) == 3
        assert page.items[1] is None

    def test_raw_items_keep_null_positions(self):
        page = OffsetPage[Track].model_validate(offset_payload(0, [None, "a", None], total=3, limit=3))
        assert page.items[0] is None
        assert page.items[1] == Track(name="a")
        assert page.items[2] is None
