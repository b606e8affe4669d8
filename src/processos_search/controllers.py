"""List and detail state controllers.

Each controller tags every request with a generation number. A response whose
generation is no longer the latest is dropped, so a slow request issued before
a parameter change cannot overwrite newer state.
"""

from __future__ import annotations

import logging
import threading
from typing import Protocol

from .client import ApiError
from .models import Process, ProcessesListParams, ProcessesListResponse, ProcessListItem
from .notify import Notifier

logger = logging.getLogger(__name__)


class ListSource(Protocol):
    def list(self, params: ProcessesListParams | None = None) -> ProcessesListResponse: ...


class DetailSource(Protocol):
    def get_by_case_number(self, case_number: str) -> Process: ...


class _GenerationMixin:
    def _init_generation(self) -> None:
        self._lock = threading.Lock()
        self._generation = 0
        self.loading = False

    def _begin(self) -> int:
        with self._lock:
            self._generation += 1
            self.loading = True
            self.error = None
            return self._generation

    def _is_current(self, generation: int) -> bool:
        if generation != self._generation:
            logger.debug("discarding stale response (generation %d, current %d)", generation, self._generation)
            return False
        return True

    def _settle(self, generation: int) -> bool:
        """Clear the loading flag if *generation* is still current. Caller holds the lock."""
        if not self._is_current(generation):
            return False
        self.loading = False
        return True


class ProcessesController(_GenerationMixin):
    """Accumulated process list with cursor pagination."""

    def __init__(
        self,
        api: ListSource,
        notifier: Notifier,
        initial_params: ProcessesListParams | None = None,
    ) -> None:
        self.api = api
        self.notifier = notifier
        self.initial_params = initial_params
        self._init_generation()
        self.processes: list[ProcessListItem] = []
        self.error: ApiError | None = None
        self.has_more = False
        self.next_cursor: str | None = None
        self.current_params: ProcessesListParams | None = initial_params
        self.initialized = False

    def initial_load(self) -> None:
        if self.initialized:
            return
        self.initialized = True
        params = self.initial_params or ProcessesListParams()
        self.current_params = params
        self._fetch(params, append=False, silent=True)

    def refetch(self, params: ProcessesListParams | None = None) -> None:
        params = params or self.current_params or ProcessesListParams()
        self.current_params = params
        self._fetch(params, append=False)

    def load_more(self) -> bool:
        """Fetch the next page and append it. Returns False when nothing was requested."""
        if self.loading or not self.has_more or not self.next_cursor:
            return False
        params = (self.current_params or ProcessesListParams()).replace(cursor=self.next_cursor)
        self._fetch(params, append=True)
        return True

    def reset(self) -> None:
        with self._lock:
            self._generation += 1
            self.processes = []
            self.error = None
            self.loading = False
            self.has_more = False
            self.next_cursor = None
            self.current_params = self.initial_params
            self.initialized = False

    def _fetch(self, params: ProcessesListParams, *, append: bool, silent: bool = False) -> None:
        generation = self._begin()
        try:
            response = self.api.list(params)
        except ApiError as err:
            with self._lock:
                if not self._settle(generation):
                    return
                self.error = err
                if not append:
                    self.processes = []
            logger.warning("failed to list processes: %s", err.message)
            self.notifier.error(err.message)
            return
        except Exception:
            with self._lock:
                self._settle(generation)
            raise

        with self._lock:
            if not self._settle(generation):
                return
            if append:
                self.processes = [*self.processes, *response.data]
            else:
                self.processes = list(response.data)
            self.has_more = response.has_more
            self.next_cursor = response.next_cursor

        count = len(response.data)
        if append:
            self.notifier.success(f"{count} processo(s) carregado(s)")
        elif count and not silent:
            self.notifier.success(f"{count} processo(s) encontrado(s)")


class ProcessController(_GenerationMixin):
    """Single process fetched by case number."""

    def __init__(self, api: DetailSource, notifier: Notifier, case_number: str | None = None) -> None:
        self.api = api
        self.notifier = notifier
        self.case_number = case_number
        self._init_generation()
        self.process: Process | None = None
        self.error: ApiError | None = None

    def set_case_number(self, case_number: str | None) -> None:
        """Switch to another process. A None case number keeps the current state."""
        self.case_number = case_number
        if case_number:
            self.fetch(silent=True)

    def fetch(self, silent: bool = True) -> None:
        case_number = self.case_number
        if not case_number:
            return

        generation = self._begin()
        try:
            process = self.api.get_by_case_number(case_number)
        except ApiError as err:
            with self._lock:
                if not self._settle(generation):
                    return
                self.error = err
                self.process = None
            logger.warning("failed to load process %s: %s", case_number, err.message)
            self.notifier.error(err.message)
            return
        except Exception:
            with self._lock:
                self._settle(generation)
            raise

        with self._lock:
            if not self._settle(generation):
                return
            self.process = process

        if not silent:
            self.notifier.success(f"Processo {process.numero} carregado")

    def refetch(self) -> None:
        self.fetch(silent=False)
