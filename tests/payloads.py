"""Raw API payload builders shared by the tests."""

from __future__ import annotations

BASE_URL = "http://api.test/api"
NUMERO = "5000918-41.2021.8.13.0487"


def list_item(numero: str = NUMERO, grau: str = "G1", **overrides) -> dict:
    item = {
        "numeroProcesso": numero,
        "siglaTribunal": "TJMG",
        "grauAtual": grau,
        "classePrincipal": "Procedimento Comum Cível",
        "assuntoPrincipal": "Indenização por Dano Moral",
        "ultimoMovimento": {
            "dataHora": "2024-03-12T14:30:00Z",
            "descricao": "Conclusos para despacho",
            "orgaoJulgador": "1ª Vara Cível de Betim",
        },
        "partesResumo": {"ativo": ["Maria da Silva"], "passivo": ["Banco XYZ S.A."]},
    }
    item.update(overrides)
    return item


def list_page(count: int, cursor: str | None = None, start: int = 0) -> dict:
    items = [list_item(numero=f"{start + i:07d}-41.2021.8.13.0487") for i in range(count)]
    page = {"items": items}
    if cursor is not None:
        page["nextCursor"] = cursor
    return page


def parte(nome: str = "Maria da Silva", polo: str = "ativo", **overrides) -> dict:
    data = {
        "nome": nome,
        "polo": polo,
        "tipoParte": "AUTOR",
        "representantes": [
            {"nome": "João Advogado", "tipo": "ADVOGADO"},
        ],
    }
    data.update(overrides)
    return data


def detail(numero: str = NUMERO, **overrides) -> dict:
    data = {
        "numeroProcesso": numero,
        "siglaTribunal": "TJMG",
        "nivelSigilo": 0,
        "tramitacaoAtual": {
            "grau": "G1",
            "orgaoJulgador": "1ª Vara Cível de Betim",
            "classes": ["Procedimento Comum Cível", "Cumprimento de Sentença"],
            "assuntos": ["Indenização por Dano Moral"],
            "dataDistribuicao": "2021-05-10T09:00:00Z",
            "dataAutuacao": "2021-05-10T09:05:00Z",
        },
        "partes": [
            parte(),
            parte("Banco XYZ S.A.", "passivo", tipoParte="RÉU"),
        ],
        "ultimoMovimento": {
            "data": "2024-03-12T14:30:00Z",
            "descricao": "Conclusos para despacho",
            "orgaoJulgador": "1ª Vara Cível de Betim",
            "codigo": "51",
        },
    }
    data.update(overrides)
    return data
