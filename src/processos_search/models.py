"""View models for processo records."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class Grau(str, Enum):
    PRIMEIRO = "PRIMEIRO"
    SEGUNDO = "SEGUNDO"
    SUPERIOR = "SUPERIOR"


class Polo(str, Enum):
    ATIVO = "ATIVO"
    PASSIVO = "PASSIVO"


TRAMITACAO_STATUS = "EM_TRAMITACAO"


@dataclass(frozen=True)
class MovimentoResumo:
    data: str
    descricao: str


@dataclass(frozen=True)
class ProcessListItem:
    id: str
    numero: str
    tribunal: str
    grau: Grau
    classe_principal: str
    assunto_principal: str
    ultimo_movimento: MovimentoResumo


@dataclass(frozen=True)
class Movimento:
    id: str
    data: str
    descricao: str
    tipo: str
    orgao_julgador: str | None = None
    codigo: str | None = None


@dataclass(frozen=True)
class Tramitacao:
    id: str
    local: str
    status: str = TRAMITACAO_STATUS
    data: str | None = None
    data_autuacao: str | None = None


@dataclass(frozen=True)
class Representante:
    id: str
    nome: str
    tipo: str


@dataclass(frozen=True)
class SimplifiedParte:
    id: str
    nome: str
    tipo: Polo
    tipo_parte: str
    representantes: tuple[Representante, ...] = ()
    documento: str | None = None


@dataclass(frozen=True)
class Process:
    id: str
    numero: str
    tribunal: str
    nivel_sigilo: int
    grau: Grau
    classes: tuple[str, ...]
    assuntos: tuple[str, ...]
    classe_principal: str
    assunto_principal: str
    ultimo_movimento: Movimento
    movimentos: tuple[Movimento, ...]
    partes: tuple[SimplifiedParte, ...]
    tramitacao_atual: Tramitacao
    data_distribuicao: str
    data_autuacao: str

    def partes_por_polo(self, polo: Polo) -> list[SimplifiedParte]:
        return [p for p in self.partes if p.tipo == polo]


@dataclass(frozen=True)
class ProcessesListParams:
    """Query parameters for the list endpoint. Every field is optional."""

    q: str | None = None
    tribunal: str | None = None
    grau: Grau | None = None
    cursor: str | None = None
    limit: int | None = None

    def replace(self, **changes) -> ProcessesListParams:
        return replace(self, **changes)


@dataclass(frozen=True)
class ProcessesListResponse:
    data: list[ProcessListItem]
    next_cursor: str | None = None
    has_more: bool = False
