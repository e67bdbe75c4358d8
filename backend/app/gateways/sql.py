"""Gateway de usuarios sobre uma AsyncSession do SQLAlchemy."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import delete, exists, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import MAIOR_INTEIRO_BANCO
from app.exceptions import ArmazenamentoIndisponivelError, ViolacaoIntegridadeError
from app.gateways.base import CAMPOS_ORDENAVEIS, UsuarioGateway
from app.models.usuario import Usuario
from app.pagination import Pagina, Paginacao

logger = logging.getLogger(__name__)


@contextmanager
def _erros_de_armazenamento() -> Iterator[None]:
    try:
        yield
    except IntegrityError as e:
        raise ViolacaoIntegridadeError(str(e.orig)) from e
    except SQLAlchemyError as e:
        logger.error("Falha de acesso ao banco: %s", e)
        raise ArmazenamentoIndisponivelError("Serviço temporariamente indisponível") from e


def _id_representavel(usuario_id: int) -> bool:
    return -MAIOR_INTEIRO_BANCO - 1 <= usuario_id <= MAIOR_INTEIRO_BANCO


class SqlAlchemyUsuarioGateway(UsuarioGateway):
    def __init__(self, db: AsyncSession):
        self._db = db

    async def save(self, usuario: Usuario) -> Usuario:
        with _erros_de_armazenamento():
            self._db.add(usuario)
            await self._db.flush()
            await self._db.refresh(usuario)
        return usuario

    async def find_by_id(self, usuario_id: int) -> Usuario | None:
        if not _id_representavel(usuario_id):
            return None
        with _erros_de_armazenamento():
            return await self._db.get(Usuario, usuario_id)

    async def find_all(self, paginacao: Paginacao) -> Pagina[Usuario]:
        ordenacao = []
        for ordem in paginacao.sort:
            coluna = getattr(Usuario, CAMPOS_ORDENAVEIS[ordem.campo])
            ordenacao.append(coluna.desc() if ordem.descendente else coluna.asc())
        # Desempate por id para paginas disjuntas
        if not any(ordem.campo == "id" for ordem in paginacao.sort):
            ordenacao.append(Usuario.id.asc())

        query = (
            select(Usuario)
            .order_by(*ordenacao)
            .offset(paginacao.offset)
            .limit(paginacao.size)
        )
        with _erros_de_armazenamento():
            total_result = await self._db.execute(select(func.count()).select_from(Usuario))
            total = total_result.scalar() or 0
            result = await self._db.execute(query)
            usuarios = list(result.scalars().all())

        return Pagina(content=usuarios, total_elements=total, paginacao=paginacao)

    async def exists_by_email(self, email: str) -> bool:
        with _erros_de_armazenamento():
            result = await self._db.execute(select(exists().where(Usuario.email == email)))
            return bool(result.scalar())

    async def exists_by_id(self, usuario_id: int) -> bool:
        if not _id_representavel(usuario_id):
            return False
        with _erros_de_armazenamento():
            result = await self._db.execute(select(exists().where(Usuario.id == usuario_id)))
            return bool(result.scalar())

    async def delete_by_id(self, usuario_id: int) -> None:
        if not _id_representavel(usuario_id):
            return
        with _erros_de_armazenamento():
            await self._db.execute(delete(Usuario).where(Usuario.id == usuario_id))

    async def commit(self) -> None:
        with _erros_de_armazenamento():
            await self._db.commit()

    async def rollback(self) -> None:
        await self._db.rollback()
