"""
Router de Usuarios — CRUD sobre o UsuarioService.

Endpoints:
  GET    /usuarios        — Listar (paginado: page, size, sort=campo,direcao)
  GET    /usuarios/{id}   — Buscar por id
  POST   /usuarios        — Criar
  PUT    /usuarios/{id}   — Atualizar nome/email
  DELETE /usuarios/{id}   — Remover
"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import MAIOR_INTEIRO_BANCO, get_db
from app.gateways import CAMPOS_ORDENAVEIS, SqlAlchemyUsuarioGateway
from app.pagination import Paginacao, parse_sort
from app.schemas.usuario import ErroResponse, PaginaUsuarioResponse, UsuarioDTO, UsuarioPayload
from app.services.usuario_service import UsuarioService

router = APIRouter(prefix="/usuarios", tags=["usuarios"])

_NAO_ENCONTRADO = {status.HTTP_404_NOT_FOUND: {"model": ErroResponse}}
_INVALIDO = {status.HTTP_400_BAD_REQUEST: {"model": ErroResponse}}


def get_usuario_service(db: AsyncSession = Depends(get_db)) -> UsuarioService:
    return UsuarioService(SqlAlchemyUsuarioGateway(db))


@router.get("", response_model=PaginaUsuarioResponse, responses=_INVALIDO)
async def list_usuarios(
    page: int = Query(
        0,
        ge=0,
        le=MAIOR_INTEIRO_BANCO // settings.MAX_PAGE_SIZE,
        description="Numero da pagina (base 0)",
    ),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    sort: list[str] = Query(["id,asc"], description="campo,direcao (asc|desc); pode repetir"),
    service: UsuarioService = Depends(get_usuario_service),
):
    paginacao = Paginacao(page=page, size=size, sort=parse_sort(sort, CAMPOS_ORDENAVEIS))
    pagina = await service.listar_todos(paginacao)
    return PaginaUsuarioResponse.from_pagina(pagina)


@router.get("/{usuario_id}", response_model=UsuarioDTO, responses=_NAO_ENCONTRADO)
async def get_usuario(usuario_id: int, service: UsuarioService = Depends(get_usuario_service)):
    return await service.buscar_por_id(usuario_id)


@router.post(
    "",
    response_model=UsuarioDTO,
    status_code=status.HTTP_201_CREATED,
    responses=_INVALIDO,
)
async def create_usuario(body: UsuarioPayload, service: UsuarioService = Depends(get_usuario_service)):
    return await service.criar(body.to_dto())


@router.put(
    "/{usuario_id}",
    response_model=UsuarioDTO,
    responses={**_NAO_ENCONTRADO, **_INVALIDO},
)
async def update_usuario(
    usuario_id: int,
    body: UsuarioPayload,
    service: UsuarioService = Depends(get_usuario_service),
):
    return await service.atualizar(usuario_id, body.to_dto())


@router.delete("/{usuario_id}", status_code=status.HTTP_204_NO_CONTENT, responses=_NAO_ENCONTRADO)
async def delete_usuario(usuario_id: int, service: UsuarioService = Depends(get_usuario_service)):
    await service.deletar(usuario_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
