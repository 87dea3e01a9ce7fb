from pypager.utils.types import merge_params


class TestMergeParams:
    def test_override_wins_and_keeps_position(self):
        merged = merge_params([("offset", 0), ("limit", 20)], [("limit", 50)])
        assert merged == [("offset", 0), ("limit", 50)]

    def test_kwargs_have_highest_precedence(self):
        merged = merge_params([("market", "US")], [("market", "DE")], market="FR", limit=5)
        assert merged == [("market", "FR"), ("limit", 5)]

    def test_empty(self):
        assert merge_params() == []
        assert merge_params(None, [("after", "t1")]) == [("after", "t1")]
