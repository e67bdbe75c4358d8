"""
Servico de Usuarios — regras de negocio sobre o gateway de persistencia.

Regras:
- Nome e email obrigatorios (nao vazios apos strip), nessa ordem
- Email unico; no update so consulta unicidade se o email mudou
- Apenas nome/email sao alterados no update (id e data_criacao preservados)
- Cada operacao publica e uma unidade de trabalho: commit no sucesso, rollback em qualquer erro
"""

import functools
import logging

from app.exceptions import RecursoNaoEncontradoError, ValidacaoError, ViolacaoIntegridadeError
from app.gateways.base import UsuarioGateway
from app.models.usuario import Usuario
from app.pagination import Pagina, Paginacao
from app.schemas.usuario import UsuarioDTO

logger = logging.getLogger(__name__)


def transacional(func):
    """Envolve o metodo em commit/rollback do gateway do servico."""

    @functools.wraps(func)
    async def wrapper(self: "UsuarioService", *args, **kwargs):
        try:
            resultado = await func(self, *args, **kwargs)
            await self._gateway.commit()
        except Exception:
            await self._gateway.rollback()
            raise
        return resultado

    return wrapper


def _em_branco(valor: str | None) -> bool:
    return valor is None or not valor.strip()


class UsuarioService:
    def __init__(self, gateway: UsuarioGateway):
        self._gateway = gateway

    @transacional
    async def listar_todos(self, paginacao: Paginacao) -> Pagina[UsuarioDTO]:
        pagina = await self._gateway.find_all(paginacao)
        return pagina.map(self._to_dto)

    @transacional
    async def buscar_por_id(self, usuario_id: int) -> UsuarioDTO:
        usuario = await self._buscar_entidade(usuario_id)
        return self._to_dto(usuario)

    @transacional
    async def criar(self, dto: UsuarioDTO) -> UsuarioDTO:
        self._validar(dto)

        if await self._gateway.exists_by_email(dto.email):
            logger.warning("Cadastro recusado, email ja existe: %s", dto.email)
            raise ValidacaoError(f"Email já cadastrado: {dto.email}")

        usuario = await self._salvar(self._to_entity(dto))
        logger.info("Usuario criado: id=%s email=%s", usuario.id, usuario.email)
        return self._to_dto(usuario)

    @transacional
    async def atualizar(self, usuario_id: int, dto: UsuarioDTO) -> UsuarioDTO:
        usuario = await self._buscar_entidade(usuario_id)

        self._validar(dto)

        if usuario.email != dto.email and await self._gateway.exists_by_email(dto.email):
            logger.warning("Atualizacao recusada, email ja existe: %s", dto.email)
            raise ValidacaoError(f"Email já cadastrado: {dto.email}")

        usuario.nome = dto.nome
        usuario.email = dto.email
        usuario = await self._salvar(usuario)
        logger.info("Usuario atualizado: id=%s", usuario.id)
        return self._to_dto(usuario)

    @transacional
    async def deletar(self, usuario_id: int) -> None:
        if not await self._gateway.exists_by_id(usuario_id):
            raise RecursoNaoEncontradoError(f"Usuário não encontrado com ID: {usuario_id}")
        await self._gateway.delete_by_id(usuario_id)
        logger.info("Usuario removido: id=%s", usuario_id)

    # ── Helpers ──────────────────────────────────────────────────

    async def _buscar_entidade(self, usuario_id: int) -> Usuario:
        usuario = await self._gateway.find_by_id(usuario_id)
        if usuario is None:
            raise RecursoNaoEncontradoError(f"Usuário não encontrado com ID: {usuario_id}")
        return usuario

    async def _salvar(self, usuario: Usuario) -> Usuario:
        # Outra requisicao pode ter gravado o mesmo email depois da checagem
        try:
            return await self._gateway.save(usuario)
        except ViolacaoIntegridadeError as e:
            logger.warning("Email duplicado detectado na escrita: %s", usuario.email)
            raise ValidacaoError(f"Email já cadastrado: {usuario.email}") from e

    @staticmethod
    def _validar(dto: UsuarioDTO) -> None:
        if _em_branco(dto.nome):
            raise ValidacaoError("Nome é obrigatório")
        if _em_branco(dto.email):
            raise ValidacaoError("Email é obrigatório")

    @staticmethod
    def _to_dto(usuario: Usuario) -> UsuarioDTO:
        return UsuarioDTO(
            id=usuario.id,
            nome=usuario.nome,
            email=usuario.email,
            data_criacao=usuario.data_criacao,
        )

    @staticmethod
    def _to_entity(dto: UsuarioDTO) -> Usuario:
        return Usuario(nome=dto.nome, email=dto.email)
