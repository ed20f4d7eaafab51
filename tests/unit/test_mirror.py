"""Tests for mirror node pagination."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

from tests.fixtures.ledger import BASE_URL, message, page

FIRST = "/api/v1/topics/0.0.5/messages?limit=2"
SECOND = "/api/v1/topics/0.0.5/messages?limit=2&page=2"
THIRD = "/api/v1/topics/0.0.5/messages?limit=2&page=3"


class TestUrls:
    async def test_first_page_url(self, make_mirror) -> None:
        mirror, _ = make_mirror({})
        assert mirror.topic_messages_url("0.0.5", 2) == BASE_URL + FIRST

    async def test_relative_next_resolved_against_base(self, make_mirror) -> None:
        mirror, _ = make_mirror({})
        assert mirror._resolve_next(SECOND) == BASE_URL + SECOND

    async def test_absolute_next_kept(self, make_mirror) -> None:
        mirror, _ = make_mirror({})
        assert mirror._resolve_next("https://other.example" + SECOND) == (
            "https://other.example" + SECOND
        )


class TestPagination:
    async def test_concatenates_pages_in_order(self, make_mirror) -> None:
        mirror, stub = make_mirror(
            {
                FIRST: page(message(1), message(2), next_link=SECOND),
                SECOND: page(message(3), message(4), next_link=THIRD),
                THIRD: page(message(5), next_link=None),
            }
        )
        result = await mirror.fetch_topic_messages("0.0.5", wait_ms=0, limit=2)

        assert [m["sequence_number"] for m in result] == [1, 2, 3, 4, 5]
        assert stub.requests == [BASE_URL + FIRST, BASE_URL + SECOND, BASE_URL + THIRD]

    async def test_single_page_without_links(self, make_mirror) -> None:
        mirror, stub = make_mirror({FIRST: {"messages": [message(1)]}})
        result = await mirror.fetch_topic_messages("0.0.5", wait_ms=0, limit=2)
        assert len(result) == 1
        assert len(stub.requests) == 1

    async def test_empty_page_contributes_nothing(self, make_mirror) -> None:
        mirror, _ = make_mirror(
            {
                FIRST: page(next_link=SECOND),
                SECOND: page(message(7)),
            }
        )
        result = await mirror.fetch_topic_messages("0.0.5", wait_ms=0, limit=2)
        assert [m["sequence_number"] for m in result] == [7]

    async def test_first_request_failure_returns_empty(self, make_mirror) -> None:
        mirror, _ = make_mirror({FIRST: 500})
        assert await mirror.fetch_topic_messages("0.0.5", wait_ms=0, limit=2) == []

    async def test_unknown_topic_returns_empty(self, make_mirror) -> None:
        mirror, _ = make_mirror({})
        assert await mirror.fetch_topic_messages("0.0.5", wait_ms=0, limit=2) == []

    async def test_later_failure_keeps_partial_results(self, make_mirror) -> None:
        mirror, _ = make_mirror(
            {
                FIRST: page(message(1), message(2), next_link=SECOND),
                SECOND: 503,
            }
        )
        result = await mirror.fetch_topic_messages("0.0.5", wait_ms=0, limit=2)
        assert [m["sequence_number"] for m in result] == [1, 2]

    async def test_unparseable_body_keeps_partial_results(self, make_mirror) -> None:
        mirror, _ = make_mirror(
            {
                FIRST: page(message(1), next_link=SECOND),
                SECOND: "<html>gateway timeout</html>",
            }
        )
        result = await mirror.fetch_topic_messages("0.0.5", wait_ms=0, limit=2)
        assert [m["sequence_number"] for m in result] == [1]

    async def test_non_object_body_stops(self, make_mirror) -> None:
        mirror, _ = make_mirror({FIRST: "[1, 2, 3]"})
        assert await mirror.fetch_topic_messages("0.0.5", wait_ms=0, limit=2) == []


class TestMalformedPages:
    async def test_non_string_next_keeps_page_and_stops(self, make_mirror) -> None:
        mirror, stub = make_mirror(
            {FIRST: {"messages": [message(1)], "links": {"next": 5}}}
        )
        result = await mirror.fetch_topic_messages("0.0.5", wait_ms=0, limit=2)

        assert [m["sequence_number"] for m in result] == [1]
        assert len(stub.requests) == 1

    async def test_non_object_links_keeps_page_and_stops(self, make_mirror) -> None:
        mirror, stub = make_mirror({FIRST: {"messages": [message(1)], "links": "oops"}})
        result = await mirror.fetch_topic_messages("0.0.5", wait_ms=0, limit=2)

        assert [m["sequence_number"] for m in result] == [1]
        assert len(stub.requests) == 1

    async def test_messages_object_is_rejected(self, make_mirror) -> None:
        mirror, _ = make_mirror(
            {FIRST: {"messages": {"a": 1, "b": 2}, "links": {"next": None}}}
        )
        assert await mirror.fetch_topic_messages("0.0.5", wait_ms=0, limit=2) == []

    async def test_non_object_message_items_keep_earlier_pages(self, make_mirror) -> None:
        mirror, _ = make_mirror(
            {
                FIRST: page(message(1), next_link=SECOND),
                SECOND: {"messages": [message(2), "junk"], "links": {"next": None}},
            }
        )
        result = await mirror.fetch_topic_messages("0.0.5", wait_ms=0, limit=2)
        assert [m["sequence_number"] for m in result] == [1]

    async def test_query_tool_reports_partial_results(self, make_mirror, ledger_client) -> None:
        import json

        from hedera_tools.ledger.consensus import ConsensusService
        from hedera_tools.tools.facade import create_hedera_tools

        mirror, _ = make_mirror(
            {FIRST: {"messages": [message(1)], "links": {"next": 5}}}
        )
        consensus = ConsensusService(ledger_client, mirror, default_wait_ms=0)
        tools = {t.name: t for t in create_hedera_tools(consensus, None)}

        raw = await tools["hedera_query_topic"].execute('{"topicId": "0.0.5", "limit": 2}')
        result = json.loads(raw)

        assert result["status"] == "success"
        assert [m["sequence_number"] for m in result["messages"]] == [1]


class TestTermination:
    async def test_cycle_back_to_visited_page_stops(self, make_mirror) -> None:
        mirror, stub = make_mirror(
            {
                FIRST: page(message(1), next_link=SECOND),
                SECOND: page(message(2), next_link=FIRST),
            }
        )
        result = await mirror.fetch_topic_messages("0.0.5", wait_ms=0, limit=2)

        assert [m["sequence_number"] for m in result] == [1, 2]
        assert len(stub.requests) == 2

    async def test_self_link_stops(self, make_mirror) -> None:
        mirror, stub = make_mirror({FIRST: page(message(1), next_link=FIRST)})
        result = await mirror.fetch_topic_messages("0.0.5", wait_ms=0, limit=2)
        assert len(result) == 1
        assert len(stub.requests) == 1

    async def test_page_budget(self, make_mirror) -> None:
        pages = {
            f"/api/v1/topics/0.0.5/messages?limit=1&page={i}": page(
                message(i), next_link=f"/api/v1/topics/0.0.5/messages?limit=1&page={i + 1}"
            )
            for i in range(2, 10)
        }
        pages["/api/v1/topics/0.0.5/messages?limit=1"] = page(
            message(1), next_link="/api/v1/topics/0.0.5/messages?limit=1&page=2"
        )
        mirror, stub = make_mirror(pages, max_pages=3)
        result = await mirror.fetch_topic_messages("0.0.5", wait_ms=0, limit=1)

        assert [m["sequence_number"] for m in result] == [1, 2, 3]
        assert len(stub.requests) == 3

    async def test_unbounded_when_budget_disabled(self, make_mirror) -> None:
        pages = {
            f"/api/v1/topics/0.0.5/messages?limit=1&page={i}": page(
                message(i),
                next_link=(
                    f"/api/v1/topics/0.0.5/messages?limit=1&page={i + 1}" if i < 150 else None
                ),
            )
            for i in range(2, 151)
        }
        pages["/api/v1/topics/0.0.5/messages?limit=1"] = page(
            message(1), next_link="/api/v1/topics/0.0.5/messages?limit=1&page=2"
        )
        mirror, _ = make_mirror(pages, max_pages=None)
        result = await mirror.fetch_topic_messages("0.0.5", wait_ms=0, limit=1)
        assert len(result) == 150


class TestIndexingWait:
    async def test_sleeps_before_first_request(self, make_mirror) -> None:
        mirror, _ = make_mirror({FIRST: page()})
        with patch("hedera_tools.ledger.mirror.asyncio.sleep", new_callable=AsyncMock) as sleep:
            await mirror.fetch_topic_messages("0.0.5", wait_ms=1500, limit=2)
        sleep.assert_awaited_once_with(1.5)

    async def test_zero_wait_skips_sleep(self, make_mirror) -> None:
        mirror, _ = make_mirror({FIRST: page()})
        with patch("hedera_tools.ledger.mirror.asyncio.sleep", new_callable=AsyncMock) as sleep:
            await mirror.fetch_topic_messages("0.0.5", wait_ms=0, limit=2)
        sleep.assert_not_awaited()


class TestLifecycle:
    async def test_injected_client_not_closed(self, make_mirror) -> None:
        mirror, _ = make_mirror({})
        async with mirror:
            pass
        assert not mirror._http.is_closed

    async def test_owned_client_closed(self) -> None:
        from hedera_tools.ledger.mirror import MirrorClient

        mirror = MirrorClient(BASE_URL)
        await mirror.aclose()
        assert mirror._http.is_closed
