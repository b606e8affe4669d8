"""Data-access functions for the /lawsuits endpoints."""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from .client import ApiClient, handle_api_error
from .config import DEFAULT_LIMIT, LAWSUITS_PATH, TRIBUNAIS_PATH
from .mappers import GRAU_TO_WIRE, map_detail, map_list_response
from .models import Process, ProcessesListParams, ProcessesListResponse

logger = logging.getLogger(__name__)


def build_list_query(params: ProcessesListParams) -> dict[str, str | int]:
    query = {
        "search": params.q,
        "tribunal": params.tribunal,
        "grau": GRAU_TO_WIRE[params.grau] if params.grau else None,
        "cursor": params.cursor,
        "limit": params.limit or DEFAULT_LIMIT,
    }
    return {k: v for k, v in query.items() if v not in (None, "")}


class ProcessesApi:
    """List, fetch and court lookups. Transport errors surface as ApiError."""

    def __init__(self, client: ApiClient) -> None:
        self.client = client

    def list(self, params: ProcessesListParams | None = None) -> ProcessesListResponse:
        query = build_list_query(params or ProcessesListParams())
        try:
            raw = self.client.get(LAWSUITS_PATH, params=query)
        except httpx.HTTPError as e:
            raise handle_api_error(e) from e
        response = map_list_response(raw)
        logger.debug("list %s -> %d items, cursor=%s", query, len(response.data), response.next_cursor)
        return response

    def get_by_case_number(self, case_number: str) -> Process:
        try:
            raw = self.client.get(f"{LAWSUITS_PATH}/{quote(case_number, safe='')}")
        except httpx.HTTPError as e:
            raise handle_api_error(e) from e
        return map_detail(raw)

    def get_tribunais(self) -> list[str]:
        try:
            raw = self.client.get(TRIBUNAIS_PATH)
        except httpx.HTTPError as e:
            raise handle_api_error(e) from e
        return sorted(set(raw))
