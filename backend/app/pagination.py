"""
Paginacao e ordenacao no formato page/size/sort (`campo,direcao`).

Exemplo: ?page=0&size=10&sort=nome,desc&sort=id,asc
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from app.exceptions import ValidacaoError

T = TypeVar("T")
R = TypeVar("R")

ASC = "asc"
DESC = "desc"


@dataclass(frozen=True)
class Ordem:
    campo: str
    direcao: str = ASC

    @property
    def descendente(self) -> bool:
        return self.direcao == DESC


@dataclass(frozen=True)
class Paginacao:
    """Pedido de pagina: numero (base 0), tamanho e criterios de ordenacao."""

    page: int = 0
    size: int = 10
    sort: tuple[Ordem, ...] = (Ordem("id", ASC),)

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass
class Pagina(Generic[T]):
    """Fatia de uma colecao ordenada mais o total de elementos."""

    content: list[T]
    total_elements: int
    paginacao: Paginacao = field(default_factory=Paginacao)

    @property
    def total_pages(self) -> int:
        if self.paginacao.size <= 0:
            return 0
        return math.ceil(self.total_elements / self.paginacao.size)

    @property
    def first(self) -> bool:
        return self.paginacao.page == 0

    @property
    def last(self) -> bool:
        return self.paginacao.page + 1 >= self.total_pages

    def map(self, func: Callable[[T], R]) -> Pagina[R]:
        return Pagina(
            content=[func(item) for item in self.content],
            total_elements=self.total_elements,
            paginacao=self.paginacao,
        )


def parse_sort(valores: Iterable[str], campos_permitidos: Iterable[str]) -> tuple[Ordem, ...]:
    """Converte valores `campo[,direcao]` em criterios de ordenacao.

    Raises:
        ValidacaoError: campo desconhecido ou direcao diferente de asc/desc
    """
    permitidos = set(campos_permitidos)
    ordens: list[Ordem] = []
    for valor in valores:
        partes = [p.strip() for p in valor.split(",") if p.strip()]
        if not partes:
            continue
        campo = partes[0]
        direcao = partes[1].lower() if len(partes) > 1 else ASC
        if campo not in permitidos:
            raise ValidacaoError(f"Campo de ordenação inválido: {campo}")
        if direcao not in (ASC, DESC) or len(partes) > 2:
            raise ValidacaoError(f"Direção de ordenação inválida: {valor}")
        ordens.append(Ordem(campo, direcao))
    return tuple(ordens) or (Ordem("id", ASC),)
