"""Map raw API payloads into view models.

The mappers assume payloads follow the ``/lawsuits`` contract (three-valued
``G1``/``G2``/``SUP`` grau). They do not validate: a missing required key
raises ``KeyError`` and an unexpected grau raises ``ValueError``.
"""

from __future__ import annotations

import logging

from .models import (
    Grau,
    Movimento,
    MovimentoResumo,
    Polo,
    Process,
    ProcessesListResponse,
    ProcessListItem,
    Representante,
    SimplifiedParte,
    Tramitacao,
)

logger = logging.getLogger(__name__)

GRAU_FROM_WIRE = {
    "G1": Grau.PRIMEIRO,
    "G2": Grau.SEGUNDO,
    "SUP": Grau.SUPERIOR,
}
GRAU_TO_WIRE = {v: k for k, v in GRAU_FROM_WIRE.items()}

POLO_FROM_WIRE = {
    "ativo": Polo.ATIVO,
    "passivo": Polo.PASSIVO,
}


def map_grau(raw: str) -> Grau:
    try:
        return GRAU_FROM_WIRE[raw]
    except KeyError:
        raise ValueError(f"Unknown grau: {raw!r}") from None


def map_list_item(raw: dict, index: int) -> ProcessListItem:
    numero = raw["numeroProcesso"]
    movimento = raw["ultimoMovimento"]
    return ProcessListItem(
        id=f"{numero}-{index}",
        numero=numero,
        tribunal=raw["siglaTribunal"],
        grau=map_grau(raw["grauAtual"]),
        classe_principal=raw["classePrincipal"],
        assunto_principal=raw["assuntoPrincipal"],
        ultimo_movimento=MovimentoResumo(
            data=movimento["dataHora"],
            descricao=movimento["descricao"],
        ),
    )


def map_list_response(raw: dict) -> ProcessesListResponse:
    items = [map_list_item(item, i) for i, item in enumerate(raw["items"])]
    next_cursor = raw.get("nextCursor")
    return ProcessesListResponse(
        data=items,
        next_cursor=next_cursor,
        has_more=bool(next_cursor),
    )


def map_representante(raw: dict, index: int) -> Representante:
    return Representante(
        id=f"representante-{index}-{raw['nome']}",
        nome=raw["nome"],
        tipo=raw["tipo"],
    )


def map_parte(raw: dict, index: int) -> SimplifiedParte:
    polo = raw["polo"]
    tipo = POLO_FROM_WIRE.get(polo)
    if tipo is None:
        # outros_participantes and anything unknown fall on the active side
        logger.debug("parte %r has polo %r, treating as ATIVO", raw["nome"], polo)
        tipo = Polo.ATIVO
    return SimplifiedParte(
        id=f"{polo}-{index}-{raw['nome']}",
        nome=raw["nome"],
        tipo=tipo,
        tipo_parte=raw["tipoParte"],
        representantes=tuple(
            map_representante(rep, i) for i, rep in enumerate(raw["representantes"])
        ),
        documento=raw.get("documento"),
    )


def map_detail(raw: dict) -> Process:
    numero = raw["numeroProcesso"]
    tramitacao = raw["tramitacaoAtual"]
    movimento = raw["ultimoMovimento"]

    codigo = movimento.get("codigo")
    ultimo_movimento = Movimento(
        id=f"movimento-{numero}-{codigo or 'last'}",
        data=movimento["data"],
        descricao=movimento["descricao"],
        tipo=codigo or "",
        orgao_julgador=movimento.get("orgaoJulgador"),
        codigo=codigo,
    )

    classes = tuple(tramitacao.get("classes") or [])
    assuntos = tuple(tramitacao.get("assuntos") or [])

    return Process(
        id=numero,
        numero=numero,
        tribunal=raw["siglaTribunal"],
        nivel_sigilo=raw["nivelSigilo"],
        grau=map_grau(tramitacao["grau"]),
        classes=classes,
        assuntos=assuntos,
        classe_principal=classes[0] if classes else "",
        assunto_principal=assuntos[0] if assuntos else "",
        ultimo_movimento=ultimo_movimento,
        # the API only exposes the last movement for now
        movimentos=(ultimo_movimento,),
        partes=tuple(map_parte(p, i) for i, p in enumerate(raw["partes"])),
        tramitacao_atual=Tramitacao(
            id=f"tramitacao-{numero}",
            local=tramitacao["orgaoJulgador"],
            data=tramitacao.get("dataDistribuicao"),
            data_autuacao=tramitacao.get("dataAutuacao"),
        ),
        data_distribuicao=tramitacao.get("dataDistribuicao", ""),
        data_autuacao=tramitacao.get("dataAutuacao", ""),
    )
