import pytest

from app.schemas.search import Creator
from app.services.search_modal import SearchModal
from app.services.search_state import Idle, Success


class StaticProvider:
    def __init__(self, payload: dict) -> None:
        self.payload = payload
        self.calls: list[str] = []

    async def search_creators(self, query: str) -> dict:
        self.calls.append(query)
        return self.payload


AARON = {"id": "1", "name": "Aaron Amick", "description": "Submarines"}


def test_open_and_close_are_idempotent() -> None:
    modal = SearchModal(StaticProvider({}))
    assert not modal.is_open

    controller = modal.open()
    assert modal.open() is controller
    assert modal.is_open

    modal.close()
    modal.close()
    assert not modal.is_open
    assert controller.disposed


def test_reopening_starts_from_a_fresh_controller() -> None:
    modal = SearchModal(StaticProvider({}))
    first = modal.open()
    modal.close()
    second = modal.open()

    assert second is not first
    assert second.state == Idle()
    assert second.query == ""
    modal.close()


@pytest.mark.asyncio
async def test_selecting_a_creator_closes_the_modal() -> None:
    selected: list[Creator] = []
    modal = SearchModal(StaticProvider({"creators": [AARON], "totalCount": 1}), on_creator_selected=selected.append)
    controller = modal.open()

    await controller.execute_search("aaron")
    assert isinstance(controller.state, Success)
    controller.handle_key("ArrowDown")
    controller.handle_key("Enter")

    assert [c.id for c in selected] == ["1"]
    assert not modal.is_open
    assert controller.disposed


def test_escape_closes_the_modal() -> None:
    modal = SearchModal(StaticProvider({}))
    controller = modal.open()
    controller.handle_key("Escape")
    assert not modal.is_open


@pytest.mark.asyncio
async def test_global_search_navigates_to_encoded_url() -> None:
    urls: list[str] = []
    modal = SearchModal(StaticProvider({}), debounce_seconds=10, on_navigate=urls.append)
    controller = modal.open()

    controller.submit_query_change("suya spots")
    controller.search_globally()
    controller.handle_key("Enter")

    assert urls == ["/search?q=suya%20spots", "/search?q=suya%20spots"]
    assert modal.is_open
    modal.close()
