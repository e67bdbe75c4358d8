from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, validate_email
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from app.pagination import Pagina


class UsuarioDTO(BaseModel):
    """Representacao de um usuario na fronteira da API."""

    id: int | None = None
    nome: str | None = None
    email: str | None = None
    data_criacao: datetime | None = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UsuarioPayload(BaseModel):
    """Corpo de POST/PUT. id e dataCriacao enviados pelo cliente sao ignorados."""

    nome: str
    email: str

    model_config = ConfigDict(extra="ignore")

    @field_validator("nome", mode="before")
    @classmethod
    def nome_nao_vazio(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise PydanticCustomError("nome_obrigatorio", "Nome é obrigatório")
        return value

    @field_validator("email", mode="before")
    @classmethod
    def email_nao_vazio(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise PydanticCustomError("email_obrigatorio", "Email é obrigatório")
        return value

    @field_validator("email")
    @classmethod
    def email_valido(cls, value: str) -> str:
        # Valida a sintaxe mas guarda o endereco exatamente como enviado
        validate_email(value)
        return value

    def to_dto(self) -> UsuarioDTO:
        return UsuarioDTO(nome=self.nome, email=self.email)


class PageableResponse(BaseModel):
    page_number: int
    page_size: int
    offset: int

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaginaUsuarioResponse(BaseModel):
    """Pagina de usuarios no formato content/pageable/totalElements/totalPages."""

    content: list[UsuarioDTO]
    pageable: PageableResponse
    total_elements: int
    total_pages: int
    size: int
    number: int
    number_of_elements: int
    first: bool
    last: bool
    empty: bool

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_pagina(cls, pagina: Pagina[UsuarioDTO]) -> "PaginaUsuarioResponse":
        paginacao = pagina.paginacao
        return cls(
            content=pagina.content,
            pageable=PageableResponse(
                page_number=paginacao.page,
                page_size=paginacao.size,
                offset=paginacao.offset,
            ),
            total_elements=pagina.total_elements,
            total_pages=pagina.total_pages,
            size=paginacao.size,
            number=paginacao.page,
            number_of_elements=len(pagina.content),
            first=pagina.first,
            last=pagina.last,
            empty=not pagina.content,
        )


class ErroResponse(BaseModel):
    message: str
    errors: dict[str, str] | None = None
