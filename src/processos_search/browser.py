"""Search orchestration on top of ProcessesController: local filters, debounce, paging helpers."""

from __future__ import annotations

import logging
import math
import re
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Generic, Iterable, Sequence, TypeVar

from .config import DEBOUNCE_SECONDS, PARTES_PER_PAGE
from .controllers import ProcessesController
from .models import Grau, ProcessesListParams, ProcessListItem
from .process_number import apply_process_number_mask, is_complete_process_number

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Debouncer:
    """Run *callback* once, *delay* seconds after the last call().

    A timed callback runs under the lock, so once cancel() returns no
    earlier call() can still fire.
    """

    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self.delay = delay
        self.callback = callback
        self._lock = threading.RLock()
        self._timer: threading.Timer | None = None
        self._last: threading.Timer | None = None
        self._seq = 0

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def call(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._seq += 1
            timer = threading.Timer(self.delay, self._fire, args=(self._seq,))
            timer.daemon = True
            self._timer = self._last = timer
            timer.start()

    def _fire(self, seq: int) -> None:
        with self._lock:
            if seq != self._seq or self._timer is None:
                return
            self._timer = None
            self.callback()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._seq += 1

    def flush(self) -> bool:
        """Run the pending callback now. Returns False if nothing was pending."""
        with self._lock:
            if self._timer is None:
                return False
            self._timer.cancel()
            self._timer = None
            self._seq += 1
        self.callback()
        return True

    def wait(self, timeout: float | None = None) -> None:
        """Block until the most recently scheduled callback has run or been cancelled."""
        timer = self._last
        if timer is not None:
            timer.join(timeout)


def _digits(value: str) -> str:
    return re.sub(r"\D", "", value)


def _searchable_fields(item: ProcessListItem) -> Iterable[str]:
    return (
        item.numero,
        item.tribunal,
        item.classe_principal,
        item.assunto_principal,
        item.ultimo_movimento.descricao,
        item.grau.value,
    )


def filter_processes(
    items: Sequence[ProcessListItem],
    keyword: str = "",
    numero: str = "",
) -> list[ProcessListItem]:
    """Case-insensitive keyword filter plus an exact number match once the number is complete."""
    needle = keyword.strip().lower()
    numero = numero.strip()
    numero_digits = _digits(numero) if is_complete_process_number(numero) else ""

    result = []
    for item in items:
        if numero_digits and _digits(item.numero) != numero_digits:
            continue
        if needle and not any(needle in f.lower() for f in _searchable_fields(item) if f):
            continue
        result.append(item)
    return result


@dataclass
class Page(Generic[T]):
    items: list[T]
    page: int
    total_pages: int
    total: int


def paginate(items: Sequence[T], page: int = 1, per_page: int = PARTES_PER_PAGE) -> Page[T]:
    total_pages = max(1, math.ceil(len(items) / per_page))
    page = min(max(page, 1), total_pages)
    start = (page - 1) * per_page
    return Page(list(items[start:start + per_page]), page, total_pages, len(items))


class SearchMode(str, Enum):
    SIMPLE = "simple"
    ADVANCED = "advanced"


@dataclass
class SimpleFilters:
    keyword: str = ""
    numero: str = ""
    tribunal: str = ""
    grau: Grau | None = None


@dataclass
class AdvancedFilters:
    query: str = ""
    tribunal: str = ""
    grau: Grau | None = None


@dataclass
class ProcessesBrowser:
    """Owns the search form state and drives the list controller.

    Simple mode filters loaded items locally by keyword and process number;
    its tribunal/grau changes are debounced into a remote refetch. Advanced
    mode sends everything to the API and only searches on demand.
    """

    controller: ProcessesController
    debounce_seconds: float = DEBOUNCE_SECONDS
    mode: SearchMode = SearchMode.SIMPLE
    simple: SimpleFilters = field(default_factory=SimpleFilters)
    advanced: AdvancedFilters = field(default_factory=AdvancedFilters)

    def __post_init__(self) -> None:
        self._debouncer = Debouncer(self.debounce_seconds, self._refetch_simple)

    def start(self) -> None:
        self.controller.initial_load()

    def close(self) -> None:
        self._debouncer.cancel()

    def __enter__(self) -> ProcessesBrowser:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def wait_idle(self, timeout: float | None = None) -> None:
        self._debouncer.wait(timeout)

    @property
    def refetch_pending(self) -> bool:
        return self._debouncer.pending

    def set_mode(self, mode: SearchMode) -> None:
        mode = SearchMode(mode)
        if mode == self.mode:
            return
        logger.debug("search mode %s -> %s", self.mode.value, mode.value)
        self.mode = mode
        self._debouncer.cancel()
        if mode == SearchMode.SIMPLE:
            self.advanced = AdvancedFilters()
        else:
            self.simple = SimpleFilters()
        self.controller.refetch(ProcessesListParams())

    def set_keyword(self, keyword: str) -> None:
        self.simple.keyword = keyword

    def set_numero(self, numero: str) -> None:
        self.simple.numero = apply_process_number_mask(numero)

    def set_tribunal(self, tribunal: str | None) -> None:
        self.simple.tribunal = tribunal or ""
        self._debouncer.call()

    def set_grau(self, grau: Grau | str | None) -> None:
        self.simple.grau = Grau(grau) if grau else None
        self._debouncer.call()

    def _refetch_simple(self) -> None:
        self.controller.refetch(
            ProcessesListParams(
                tribunal=self.simple.tribunal or None,
                grau=self.simple.grau,
            )
        )

    @property
    def has_local_filter(self) -> bool:
        if self.mode != SearchMode.SIMPLE:
            return False
        return bool(self.simple.keyword.strip()) or is_complete_process_number(self.simple.numero)

    def set_advanced_query(self, query: str) -> None:
        self.advanced.query = query

    def set_advanced_tribunal(self, tribunal: str | None) -> None:
        self.advanced.tribunal = tribunal or ""

    def set_advanced_grau(self, grau: Grau | str | None) -> None:
        self.advanced.grau = Grau(grau) if grau else None

    def search(self) -> None:
        self.controller.refetch(
            ProcessesListParams(
                q=self.advanced.query.strip() or None,
                tribunal=self.advanced.tribunal or None,
                grau=self.advanced.grau,
            )
        )

    def clear(self) -> None:
        self._debouncer.cancel()
        if self.mode == SearchMode.SIMPLE:
            self.simple = SimpleFilters()
        else:
            self.advanced = AdvancedFilters()
        self.controller.refetch(ProcessesListParams())

    @property
    def visible(self) -> list[ProcessListItem]:
        if self.mode == SearchMode.SIMPLE:
            return filter_processes(self.controller.processes, self.simple.keyword, self.simple.numero)
        return list(self.controller.processes)

    @property
    def can_load_more(self) -> bool:
        return self.controller.has_more and not self.controller.loading and not self.has_local_filter

    def load_more(self) -> bool:
        if not self.can_load_more:
            return False
        return self.controller.load_more()
