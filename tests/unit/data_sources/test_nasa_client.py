"""Unit tests for NasaClient (no network calls)."""

from unittest.mock import AsyncMock, patch

import pytest

from spacebio.constants import NASA_SEARCH_URL, NASA_UNTITLED
from spacebio.data_sources.base_client import DataSourceError, PartialResult
from spacebio.data_sources.nasa import NasaClient, fallback_publications


def _client(**kwargs) -> NasaClient:
    return NasaClient(api_key="TEST_KEY", **kwargs)


def _incomplete() -> PartialResult:
    return PartialResult(data=None, is_complete=False, errors=["Timeout after 30.0s"])


# --- parsing helpers ---


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, []),
        ("", []),
        ("Dr. Ada Lovelace", ["Dr. Ada Lovelace"]),
        (["A", "B"], ["A", "B"]),
        ([{"name": "A"}, {"affiliation": "NASA"}, 42], ["A", "Unknown", "Unknown"]),
        ({"name": "A"}, []),
    ],
)
def test_parse_authors(raw, expected):
    assert NasaClient._parse_authors(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, []),
        ("microgravity, plants , ,radiation", ["microgravity", "plants", "radiation"]),
        (["a", 7], ["a", "7"]),
        (12, []),
    ],
)
def test_parse_keywords(raw, expected):
    assert NasaClient._parse_keywords(raw) == expected


def test_parse_item_alternate_field_names():
    item = NasaClient._parse_item(
        {
            "id": 123,
            "name": "Seed germination",
            "description": "Seeds in orbit.",
            "author": "J. Doe",
            "date": "2022-04-01",
            "keywords": "seeds, orbit",
            "link": "https://example.com/1",
        }
    )

    assert item.id == "123"
    assert item.title == "Seed germination"
    assert item.abstract == "Seeds in orbit."
    assert item.authors == ["J. Doe"]
    assert item.published_date == "2022-04-01"
    assert item.keywords == ["seeds", "orbit"]
    assert item.url == "https://example.com/1"


def test_parse_item_defaults():
    item = NasaClient._parse_item({})

    assert item.id.startswith("nasa_")
    assert item.title == NASA_UNTITLED
    assert item.abstract is None
    assert item.authors == []
    assert item.keywords == []


# --- search_publications ---


async def test_search_parses_results_and_applies_limit():
    client = _client()
    payload = {
        "results": [
            {"id": "a", "title": "First", "categories": ["biology"]},
            "garbage",
            {"id": "b", "title": "Second"},
            {"id": "c", "title": "Third"},
        ]
    }

    with patch.object(
        client,
        "_rest_get",
        new_callable=AsyncMock,
        return_value=PartialResult(data=payload),
    ) as mock_get:
        results = await client.search_publications("plants", limit=3)

    # Non-object entries are skipped after the limit slice.
    assert [r.id for r in results] == ["a", "b"]
    assert results[0].keywords == ["biology"]
    url, params = mock_get.await_args.args
    assert url == NASA_SEARCH_URL
    assert params == {"api_key": "TEST_KEY", "query": "plants", "limit": "3"}


async def test_search_falls_back_on_incomplete_result():
    client = _client(use_fallback=True)

    with patch.object(
        client, "_rest_get", new_callable=AsyncMock, return_value=_incomplete()
    ):
        results = await client.search_publications("anything", limit=10)

    assert [r.id for r in results] == [p.id for p in fallback_publications()]


async def test_search_falls_back_on_http_error():
    client = _client(use_fallback=True)

    with patch.object(
        client,
        "_rest_get",
        new_callable=AsyncMock,
        side_effect=DataSourceError("nasa", "HTTP 403: bad key", status_code=403),
    ):
        results = await client.search_publications()

    assert len(results) == 5


@pytest.mark.parametrize("payload", [[], {"results": "none"}, {"data": []}])
async def test_search_falls_back_on_unexpected_shape(payload):
    client = _client(use_fallback=True)

    with patch.object(
        client,
        "_rest_get",
        new_callable=AsyncMock,
        return_value=PartialResult(data=payload),
    ):
        results = await client.search_publications()

    assert len(results) == 5


async def test_search_without_fallback_raises():
    client = _client(use_fallback=False)

    with patch.object(
        client, "_rest_get", new_callable=AsyncMock, return_value=_incomplete()
    ):
        with pytest.raises(DataSourceError, match="Timeout"):
            await client.search_publications()


async def test_search_empty_results_are_not_replaced():
    client = _client(use_fallback=True)

    with patch.object(
        client,
        "_rest_get",
        new_callable=AsyncMock,
        return_value=PartialResult(data={"results": []}),
    ):
        assert await client.search_publications() == []


# --- get_publication_details ---


async def test_details_returns_parsed_record():
    client = _client()

    with patch.object(
        client,
        "_rest_get",
        new_callable=AsyncMock,
        return_value=PartialResult(data={"id": "x1", "title": "One"}),
    ) as mock_get:
        record = await client.get_publication_details("x1")

    assert record.id == "x1"
    assert mock_get.await_args.args[0] == f"{NASA_SEARCH_URL}/x1"


async def test_details_returns_none_on_failure():
    client = _client()

    with patch.object(
        client, "_rest_get", new_callable=AsyncMock, return_value=_incomplete()
    ):
        assert await client.get_publication_details("x1") is None

    with patch.object(
        client,
        "_rest_get",
        new_callable=AsyncMock,
        side_effect=DataSourceError("nasa", "HTTP 404", status_code=404),
    ):
        assert await client.get_publication_details("x1") is None


# --- fallback sample ---


def test_fallback_sample_records_are_complete():
    sample = fallback_publications()

    assert len(sample) == 5
    assert len({p.id for p in sample}) == 5
    assert all(p.title and p.abstract and p.published_date for p in sample)
