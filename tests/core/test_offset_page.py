import pytest
from conftest import BASE_URL, FakeClient, Track, offset_payload
from pydantic import ValidationError

from pypager import NoRemainingPages, OffsetPage, RequestFailed


def _page(**kwargs) -> OffsetPage[Track]:
    return OffsetPage[Track].model_validate(offset_payload(**kwargs))


class TestDeserialization:
    def test_items_are_typed(self):
        page = _page(offset=0, names=["a", "b"], total=4)
        assert isinstance(page.items[0], Track)
        assert page.total == 4
        assert page.next is None

    def test_unknown_keys_are_ignored(self):
        data = offset_payload(0, ["a"], total=1)
        data["extra"] = "ignored"
        page = OffsetPage[Track].model_validate(data)
        assert not hasattr(page, "extra")

    def test_limit_must_be_positive(self):
        data = offset_payload(0, [], total=0)
        data["limit"] = 0
        with pytest.raises(ValidationError):
            OffsetPage[Track].model_validate(data)

    def test_page_is_frozen(self):
        page = _page(offset=0, names=["a"], total=1)
        with pytest.raises(ValidationError):
            page.limit = 10


class TestGetNext:
    async def test_without_next_raises(self):
        page = _page(offset=0, names=["a"], total=1)
        client = FakeClient({})
        with pytest.raises(NoRemainingPages):
            await page.get_next(client)
        assert client.requests == []

    async def test_strips_base_url_once(self):
        page = _page(offset=0, names=["a", "b"], total=4, next=f"{BASE_URL}/v1/tracks?offset=50")
        client = FakeClient({"/v1/tracks?offset=50": offset_payload(50, ["c"], total=51)})
        await page.get_next(client)
        assert client.requests == [("/v1/tracks?offset=50", [("limit", 2)])]

    async def test_returns_new_page_of_same_type(self):
        page = _page(offset=0, names=["a", "b"], total=3, next=f"{BASE_URL}/v1/tracks?offset=2")
        client = FakeClient({"/v1/tracks?offset=2": offset_payload(2, ["c"], total=3, previous=f"{BASE_URL}/v1/tracks?offset=0")})
        next_page = await page.get_next(client)
        assert type(next_page) is type(page)
        assert next_page is not page
        assert next_page.offset == 2
        assert next_page.filtered_items() == [Track(name="c")]
        assert page.offset == 0

    async def test_request_errors_propagate(self):
        page = _page(offset=0, names=["a"], total=2, next=f"{BASE_URL}/v1/tracks?offset=1")
        client = FakeClient({"/v1/tracks?offset=1": RequestFailed("boom", status_code=500)})
        with pytest.raises(RequestFailed) as exc_info:
            await page.get_next(client)
        assert exc_info.value.status_code == 500


class TestGetPrevious:
    async def test_without_previous_raises(self):
        page = _page(offset=0, names=["a"], total=1)
        with pytest.raises(NoRemainingPages):
            await page.get_previous(FakeClient({}))

    async def test_follows_previous_link(self):
        page = _page(offset=2, names=["c"], total=3, previous=f"{BASE_URL}/v1/tracks?offset=0")
        client = FakeClient({"/v1/tracks?offset=0": offset_payload(0, ["a", "b"], total=3)})
        previous = await page.get_previous(client)
        assert [t.name for t in previous.filtered_items()] == ["a", "b"]
        assert client.requests == [("/v1/tracks?offset=0", [("limit", 2)])]
