"""Tests for the data-access layer over a mocked transport."""

from __future__ import annotations

import httpx
import pytest

from payloads import NUMERO, detail, list_page
from processos_search.api import ProcessesApi, build_list_query
from processos_search.client import ApiClient, ApiError
from processos_search.models import Grau, ProcessesListParams


class TestBuildListQuery:
    def test_defaults(self):
        assert build_list_query(ProcessesListParams()) == {"limit": 20}

    @pytest.mark.parametrize(
        "grau, wire",
        [(Grau.PRIMEIRO, "G1"), (Grau.SEGUNDO, "G2"), (Grau.SUPERIOR, "SUP")],
    )
    def test_grau_translated_to_wire(self, grau, wire):
        assert build_list_query(ProcessesListParams(grau=grau))["grau"] == wire

    def test_all_params(self):
        query = build_list_query(
            ProcessesListParams(q="dano moral", tribunal="TJMG", cursor="c1", limit=50)
        )
        assert query == {"search": "dano moral", "tribunal": "TJMG", "cursor": "c1", "limit": 50}


class TestList:
    def test_list_maps_response(self, api, server):
        server.add("/lawsuits", list_page(20, cursor="next-1"))

        response = api.list()

        assert len(response.data) == 20
        assert response.has_more is True
        assert response.next_cursor == "next-1"
        request = server.requests[0]
        assert request.url.path == "/api/lawsuits"
        assert request.url.params["limit"] == "20"

    def test_list_sends_filters(self, api, server):
        server.add("/lawsuits", list_page(1))

        api.list(ProcessesListParams(q="silva", tribunal="TJSP", grau=Grau.SEGUNDO, cursor="abc"))

        params = server.requests[0].url.params
        assert params["search"] == "silva"
        assert params["tribunal"] == "TJSP"
        assert params["grau"] == "G2"
        assert params["cursor"] == "abc"

    def test_http_error_is_normalized(self, api, server):
        server.add("/lawsuits", {"message": ["limit must be positive", "grau is invalid"]}, status=400)

        with pytest.raises(ApiError) as exc_info:
            api.list()

        err = exc_info.value
        assert err.message == "limit must be positive. grau is invalid"
        assert err.status == 400
        assert err.data == {"message": ["limit must be positive", "grau is invalid"]}

    def test_malformed_payload_is_not_swallowed(self, api, server):
        server.add("/lawsuits", {"items": [{"numeroProcesso": NUMERO}]})

        with pytest.raises(KeyError):
            api.list()

    def test_network_error_is_normalized(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = ApiClient("http://api.test", transport=httpx.MockTransport(handler))
        with pytest.raises(ApiError) as exc_info:
            ProcessesApi(client).list()
        assert exc_info.value.status is None
        assert "connection refused" in exc_info.value.message


class TestGetByCaseNumber:
    def test_fetches_detail(self, api, server):
        raw = detail()
        raw["tramitacaoAtual"]["classes"] = []
        server.add(f"/lawsuits/{NUMERO}", raw)

        process = api.get_by_case_number(NUMERO)

        assert process.id == NUMERO
        assert process.classe_principal == ""
        assert len(process.movimentos) == 1

    def test_not_found(self, api, server):
        server.add(f"/lawsuits/{NUMERO}", {"message": "Processo não encontrado"}, status=404)

        with pytest.raises(ApiError) as exc_info:
            api.get_by_case_number(NUMERO)
        assert exc_info.value.message == "Processo não encontrado"
        assert exc_info.value.status == 404


class TestGetTribunais:
    def test_sorted_and_unique(self, api, server):
        server.add("/lawsuits/tribunais", ["TJSP", "TJMG", "TJSP", "STJ"])
        assert api.get_tribunais() == ["STJ", "TJMG", "TJSP"]
