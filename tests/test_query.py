"""Tests for the paginated query builder."""

import pytest

from phira_client.client import Client
from phira_client.exceptions import DeserializationError, RequestFailedError
from phira_client.models import Chart
from tests.fakes import FakeHttpBackend, json_response
from tests.fakes.http import query_params
from tests.support.payloads import chart_payload


def _page(*ids: int, count: int = 100) -> dict[str, object]:
    return {"count": count, "results": [chart_payload(i) for i in ids]}


@pytest.fixture
def charts(backend: FakeHttpBackend) -> FakeHttpBackend:
    backend.add("GET", "/chart", json_response(200, _page(1, 2)))
    return backend


def _sent_params(backend: FakeHttpBackend) -> dict[str, str]:
    return query_params(backend.calls("GET", "/chart")[-1])


class TestPagination:
    """Tests for zero-based pages becoming one-based wire pages."""

    def test_default_page_is_one(self, charts: FakeHttpBackend, client: Client) -> None:
        client.query(Chart).send()
        assert _sent_params(charts)["page"] == "1"

    def test_page_zero_sends_page_one(self, charts: FakeHttpBackend, client: Client) -> None:
        client.query(Chart).page(0).send()
        assert _sent_params(charts)["page"] == "1"

    def test_page_two_sends_page_three(self, charts: FakeHttpBackend, client: Client) -> None:
        client.query(Chart).page(2).send()
        assert _sent_params(charts)["page"] == "3"

    def test_negative_page_is_rejected(self, client: Client) -> None:
        with pytest.raises(ValueError):
            client.query(Chart).page(-1)

    def test_page_filter_cannot_override_page(
        self, charts: FakeHttpBackend, client: Client
    ) -> None:
        client.query(Chart).query("page", "99").page(1).send()
        assert _sent_params(charts)["page"] == "2"


class TestFilters:
    """Tests for filter accumulation."""

    def test_flag_sends_one(self, charts: FakeHttpBackend, client: Client) -> None:
        client.query(Chart).flag("mine").send()
        assert _sent_params(charts)["mine"] == "1"

    def test_later_query_overwrites_flag(self, charts: FakeHttpBackend, client: Client) -> None:
        client.query(Chart).flag("mine").query("mine", "x").send()
        assert _sent_params(charts)["mine"] == "x"

    def test_order_and_page_num(self, charts: FakeHttpBackend, client: Client) -> None:
        client.query(Chart).order("-rating").page_num(30).send()

        params = _sent_params(charts)
        assert params["order"] == "-rating"
        assert params["page_num"] == "30"

    def test_only_accumulated_filters_are_sent(
        self, charts: FakeHttpBackend, client: Client
    ) -> None:
        client.query(Chart).query("search", "spasm").send()
        assert _sent_params(charts) == {"search": "spasm", "page": "1"}

    def test_send_does_not_mutate_builder(self, charts: FakeHttpBackend, client: Client) -> None:
        builder = client.query(Chart).flag("ranked")
        builder.send()

        assert builder.filters == {"ranked": "1"}
        builder.page(1).send()
        assert _sent_params(charts)["page"] == "2"


class TestSend:
    """Tests for result decoding."""

    def test_returns_results_and_count(self, charts: FakeHttpBackend, client: Client) -> None:
        results, count = client.query(Chart).send()

        assert count == 100
        assert [chart.id for chart in results] == [1, 2]
        assert all(isinstance(chart, Chart) for chart in results)

    def test_results_are_not_cached_implicitly(
        self, charts: FakeHttpBackend, client: Client
    ) -> None:
        client.query(Chart).send()
        assert client.cached(Chart, 1) is None

    def test_explicit_cache_objects_after_send(
        self, charts: FakeHttpBackend, client: Client
    ) -> None:
        results, _ = client.query(Chart).send()
        client.cache_objects(results)

        assert client.load(Chart, 2) is results[1]
        assert len(charts.calls("GET", "/chart/2")) == 0

    def test_empty_page(self, backend: FakeHttpBackend, client: Client) -> None:
        backend.add("GET", "/chart", json_response(200, {"count": 0, "results": []}))

        assert client.query(Chart).send() == ([], 0)

    def test_malformed_envelope(self, backend: FakeHttpBackend, client: Client) -> None:
        backend.add("GET", "/chart", json_response(200, [chart_payload(1)]))

        with pytest.raises(DeserializationError):
            client.query(Chart).send()

    def test_error_detail_surfaces(self, backend: FakeHttpBackend, client: Client) -> None:
        backend.add("GET", "/chart", json_response(400, {"detail": "bad order"}))

        with pytest.raises(RequestFailedError, match="request failed: bad order"):
            client.query(Chart).order("nonsense").send()
