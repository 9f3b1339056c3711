"""Tests for lazy, link-following enumeration."""

from __future__ import annotations

import logging

import httpx
import pytest
import respx

from compute_cli.client.enumerator import Enumerator
from compute_cli.client.errors import (
    MalformedResponseError,
    RemoteOperationError,
    TransportError,
)
from compute_cli.models import Hypervisor, Keypair, Server
from compute_cli.service import ComputeService

COMPUTE = "https://cloud:8774/v2.1"
SERVERS = f"{COMPUTE}/servers"
NEXT_1 = f"{SERVERS}?limit=2&marker=b"
NEXT_2 = f"{SERVERS}?limit=2&marker=d"

PAGE_1 = {
    "servers": [{"id": "a", "name": "one"}, {"id": "b", "name": "two"}],
    "servers_links": [{"rel": "next", "href": NEXT_1}],
}
PAGE_2 = {
    "servers": [{"id": "c", "name": "three"}, {"id": "d", "name": "four"}],
    "servers_links": [{"rel": "next", "href": NEXT_2}],
}
PAGE_3 = {"servers": [{"id": "e", "name": "five"}]}


def pages(*bodies: dict) -> list[httpx.Response]:
    return [httpx.Response(200, json=body) for body in bodies]


class TestSinglePage:
    @respx.mock
    def test_yields_items_in_order_with_one_request(self, service: ComputeService):
        route = respx.get(SERVERS).mock(
            return_value=httpx.Response(200, json={
                "servers": [{"id": "a"}, {"id": "b"}, {"id": "c"}],
            })
        )
        servers = list(service.list_servers())
        assert [s.id for s in servers] == ["a", "b", "c"]
        assert route.call_count == 1

    @respx.mock
    def test_nothing_requested_until_iterated(self, service: ComputeService):
        route = respx.get(SERVERS).mock(
            return_value=httpx.Response(200, json={"servers": [{"id": "a"}]})
        )
        enumerator = service.list_servers()
        assert isinstance(enumerator, Enumerator)
        assert route.call_count == 0
        next(enumerator)
        assert route.call_count == 1

    @respx.mock
    def test_yields_populated_servers(self, service: ComputeService):
        respx.get(SERVERS).mock(
            return_value=httpx.Response(200, json={
                "servers": [{"id": "a", "name": "one", "links": []}],
            })
        )
        (server,) = list(service.list_servers())
        assert isinstance(server, Server)
        assert server.is_populated
        assert server.name == "one"

    @respx.mock
    def test_empty_listing(self, service: ComputeService):
        route = respx.get(SERVERS).mock(
            return_value=httpx.Response(200, json={"servers": []})
        )
        assert list(service.list_servers()) == []
        assert route.call_count == 1


class TestPageChain:
    @respx.mock
    def test_concatenates_pages_in_order(self, service: ComputeService):
        route = respx.get(SERVERS).mock(side_effect=pages(PAGE_1, PAGE_2, PAGE_3))
        ids = [s.id for s in service.list_servers()]
        assert ids == ["a", "b", "c", "d", "e"]
        assert route.call_count == 3

    @respx.mock
    def test_follows_next_link_verbatim(self, service: ComputeService):
        route = respx.get(SERVERS).mock(side_effect=pages(PAGE_1, PAGE_2, PAGE_3))
        list(service.list_servers(options={"name": "web", "limit": 2}))
        first, second, third = (call.request.url for call in route.calls)
        assert first.params["name"] == "web"
        assert first.params["limit"] == "2"
        # Options are not re-applied to the link
        assert str(second) == NEXT_1
        assert str(third) == NEXT_2

    @respx.mock
    def test_one_request_per_page_boundary(self, service: ComputeService):
        route = respx.get(SERVERS).mock(side_effect=pages(PAGE_1, PAGE_2, PAGE_3))
        enumerator = service.list_servers()
        next(enumerator)
        next(enumerator)
        assert route.call_count == 1
        next(enumerator)
        assert route.call_count == 2

    @respx.mock
    def test_detail_listing_uses_detail_path(self, service: ComputeService):
        route = respx.get(f"{SERVERS}/detail").mock(
            return_value=httpx.Response(200, json={
                "servers": [{"id": "a", "status": "ACTIVE"}],
            })
        )
        (server,) = list(service.list_servers(detailed=True))
        assert server.status == "ACTIVE"
        assert route.call_count == 1

    @respx.mock
    def test_every_call_restarts_from_first_page(self, service: ComputeService):
        route = respx.get(SERVERS).mock(
            side_effect=pages(PAGE_1, PAGE_2, PAGE_3, PAGE_1, PAGE_2, PAGE_3)
        )
        first = [s.id for s in service.list_servers()]
        second = [s.id for s in service.list_servers()]
        assert first == second
        assert str(route.calls[3].request.url) == SERVERS


class TestMapFn:
    @respx.mock
    def test_equivalent_to_pretransforming_records(self, service: ComputeService):
        def shout(record: dict) -> dict:
            return {**record, "name": record["name"].upper()}

        respx.get(SERVERS).mock(side_effect=pages(PAGE_1, PAGE_2, PAGE_3))
        mapped = [s.name for s in service.list_servers(map_fn=shout)]

        raw = PAGE_1["servers"] + PAGE_2["servers"] + PAGE_3["servers"]
        assert mapped == [shout(r)["name"] for r in raw]

    @respx.mock
    def test_map_fn_can_unwrap_envelope(self, service: ComputeService):
        respx.get(SERVERS).mock(
            return_value=httpx.Response(200, json={
                "servers": [{"wrapped": {"id": "a"}}, {"wrapped": {"id": "b"}}],
            })
        )
        servers = service.list_servers(map_fn=lambda r: r["wrapped"])
        assert [s.id for s in servers] == ["a", "b"]


class TestTermination:
    @respx.mock
    def test_empty_page_with_next_link_is_terminal(
        self, service: ComputeService, caplog: pytest.LogCaptureFixture,
    ):
        route = respx.get(SERVERS).mock(
            return_value=httpx.Response(200, json={
                "servers": [],
                "servers_links": [{"rel": "next", "href": NEXT_1}],
            })
        )
        with caplog.at_level(logging.WARNING):
            assert list(service.list_servers()) == []
        assert route.call_count == 1
        assert "empty" in caplog.text

    @respx.mock
    def test_self_referencing_link_is_terminal(self, service: ComputeService):
        looping = {
            "servers": [{"id": "c"}],
            "servers_links": [{"rel": "next", "href": NEXT_1}],
        }
        route = respx.get(SERVERS).mock(side_effect=pages(PAGE_1, looping))
        assert [s.id for s in service.list_servers()] == ["a", "b", "c"]
        assert route.call_count == 2

    @respx.mock
    def test_cycle_through_earlier_page_is_terminal(
        self, service: ComputeService, caplog: pytest.LogCaptureFixture,
    ):
        back_to_first = {
            "servers": [{"id": "e"}],
            "servers_links": [{"rel": "next", "href": NEXT_1}],
        }
        route = respx.get(SERVERS).mock(
            side_effect=pages(PAGE_1, PAGE_2, back_to_first),
        )
        with caplog.at_level(logging.WARNING):
            ids = [s.id for s in service.list_servers()]
        assert ids == ["a", "b", "c", "d", "e"]
        assert route.call_count == 3
        assert "already fetched" in caplog.text

    @respx.mock
    def test_non_next_links_are_ignored(self, service: ComputeService):
        route = respx.get(SERVERS).mock(
            return_value=httpx.Response(200, json={
                "servers": [{"id": "a"}],
                "servers_links": [{"rel": "previous", "href": NEXT_1}],
            })
        )
        assert [s.id for s in service.list_servers()] == ["a"]
        assert route.call_count == 1

    @respx.mock
    def test_explicit_iterator_protocol(self, service: ComputeService):
        respx.get(SERVERS).mock(side_effect=pages(PAGE_1, PAGE_3))
        enumerator = service.list_servers()
        ids = []
        while enumerator.has_more():
            ids.append(enumerator.fetch_next().id)
        assert ids == ["a", "b", "e"]
        assert enumerator.pages_fetched == 2
        with pytest.raises(StopIteration):
            enumerator.fetch_next()

    @respx.mock
    def test_close_stops_further_requests(self, service: ComputeService):
        route = respx.get(SERVERS).mock(side_effect=pages(PAGE_1, PAGE_2))
        enumerator = service.list_servers()
        next(enumerator)
        enumerator.close()
        assert enumerator.has_more() is False
        assert route.call_count == 1


class TestFailures:
    @respx.mock
    def test_transport_failure_on_page_two(self, service: ComputeService):
        requested: list[str] = []

        def respond(request: httpx.Request) -> httpx.Response:
            requested.append(str(request.url))
            if len(requested) == 2:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, json=PAGE_1)

        respx.get(SERVERS).mock(side_effect=respond)
        observed = []
        enumerator = service.list_servers()
        with pytest.raises(TransportError):
            for server in enumerator:
                observed.append(server.id)
        assert observed == ["a", "b"]
        assert requested == [SERVERS, NEXT_1]
        assert enumerator.has_more() is False

    @respx.mock
    def test_remote_failure_propagates(self, service: ComputeService):
        respx.get(SERVERS).mock(side_effect=[
            httpx.Response(200, json=PAGE_1),
            httpx.Response(503, json={
                "computeFault": {"message": "Service Unavailable", "code": 503},
            }),
        ])
        enumerator = service.list_servers()
        assert next(enumerator).id == "a"
        assert next(enumerator).id == "b"
        with pytest.raises(RemoteOperationError) as exc_info:
            next(enumerator)
        assert exc_info.value.status_code == 503
        assert exc_info.value.detail == "Service Unavailable"

    @respx.mock
    def test_malformed_record_ends_enumeration(self, service: ComputeService):
        route = respx.get(SERVERS).mock(
            return_value=httpx.Response(200, json={
                "servers": [{"id": "a"}, {"id": "b", "progress": "half"}, {"id": "c"}],
                "servers_links": [{"rel": "next", "href": NEXT_1}],
            })
        )
        enumerator = service.list_servers()
        assert next(enumerator).id == "a"
        with pytest.raises(MalformedResponseError):
            next(enumerator)
        assert enumerator.has_more() is False
        with pytest.raises(StopIteration):
            next(enumerator)
        assert route.call_count == 1

    @respx.mock
    def test_failing_map_fn_ends_enumeration(self, service: ComputeService):
        respx.get(SERVERS).mock(side_effect=pages(PAGE_1, PAGE_3))

        def pick(record: dict) -> dict:
            return record["wrapped"]

        enumerator = service.list_servers(map_fn=pick)
        with pytest.raises(KeyError):
            next(enumerator)
        assert enumerator.has_more() is False

    @respx.mock
    def test_missing_items_key(self, service: ComputeService):
        respx.get(SERVERS).mock(
            return_value=httpx.Response(200, json={"flavors": []})
        )
        with pytest.raises(MalformedResponseError, match="servers"):
            list(service.list_servers())

    @respx.mock
    def test_non_json_body(self, service: ComputeService):
        respx.get(SERVERS).mock(
            return_value=httpx.Response(200, text="<html>proxy error</html>")
        )
        with pytest.raises(MalformedResponseError, match="not valid JSON"):
            list(service.list_servers())

    @respx.mock
    def test_malformed_links(self, service: ComputeService):
        respx.get(SERVERS).mock(
            return_value=httpx.Response(200, json={
                "servers": [{"id": "a"}],
                "servers_links": [{"href": NEXT_1}],
            })
        )
        with pytest.raises(MalformedResponseError):
            list(service.list_servers())


class TestOtherCollections:
    @respx.mock
    def test_keypair_records_are_unwrapped(self, service: ComputeService):
        respx.get(f"{COMPUTE}/os-keypairs").mock(
            return_value=httpx.Response(200, json={
                "keypairs": [
                    {"keypair": {"name": "deploy", "fingerprint": "7e:eb", "type": "ssh"}},
                    {"keypair": {"name": "backup", "fingerprint": "1a:2b", "type": "ssh"}},
                ],
            })
        )
        keypairs = list(service.list_keypairs())
        assert all(isinstance(k, Keypair) for k in keypairs)
        assert [k.name for k in keypairs] == ["deploy", "backup"]
        assert keypairs[0].fingerprint == "7e:eb"

    @respx.mock
    def test_hypervisor_pages_follow_hypervisors_links(self, service: ComputeService):
        base = f"{COMPUTE}/os-hypervisors/detail"
        route = respx.get(base).mock(side_effect=pages(
            {
                "hypervisors": [{"id": 1, "hypervisor_hostname": "node1"}],
                "hypervisors_links": [{"rel": "next", "href": f"{base}?marker=1"}],
            },
            {"hypervisors": [{"id": 2, "hypervisor_hostname": "node2"}]},
        ))
        hypervisors = list(service.list_hypervisors(detailed=True))
        assert all(isinstance(h, Hypervisor) for h in hypervisors)
        assert [h.hypervisor_hostname for h in hypervisors] == ["node1", "node2"]
        assert route.call_count == 2

    @respx.mock
    def test_flavor_filters_are_renamed(self, service: ComputeService):
        route = respx.get(f"{COMPUTE}/flavors").mock(
            return_value=httpx.Response(200, json={"flavors": []})
        )
        list(service.list_flavors({"min_ram": 1024, "custom": "x"}))
        params = route.calls[0].request.url.params
        assert params["minRam"] == "1024"
        # Unknown filters go out untouched
        assert params["custom"] == "x"
