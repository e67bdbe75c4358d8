"""
Fixtures compartilhadas: banco SQLite temporario e gateway em memoria.

DATABASE_URL precisa ser definido antes de importar app.config.
"""

import asyncio
import copy
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest

_TMP_DIR = Path(tempfile.mkdtemp(prefix="usuarios-api-tests-"))
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TMP_DIR / 'test.db'}"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"

from fastapi.testclient import TestClient  # noqa: E402

import app.models  # noqa: E402,F401
from app.database import Base, engine  # noqa: E402
from app.exceptions import ViolacaoIntegridadeError  # noqa: E402
from app.gateways.base import CAMPOS_ORDENAVEIS, UsuarioGateway  # noqa: E402
from app.models.usuario import Usuario  # noqa: E402
from app.pagination import Pagina, Paginacao  # noqa: E402
from main import app as fastapi_app  # noqa: E402


async def recriar_tabelas() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


@pytest.fixture()
def banco():
    asyncio.run(recriar_tabelas())
    yield


@pytest.fixture()
def client(banco):
    return TestClient(fastapi_app)


class InMemoryUsuarioGateway(UsuarioGateway):
    """Gateway em memoria com commit/rollback por snapshot.

    Registra as consultas de email para os testes verificarem quando a
    checagem de unicidade acontece.
    """

    def __init__(self):
        self._registros: dict[int, dict] = {}
        self._confirmados: dict[int, dict] = {}
        self._proximo_id = 1
        self.consultas_email: list[str] = []
        self.commits = 0
        self.rollbacks = 0

    @property
    def total(self) -> int:
        return len(self._registros)

    def adicionar(self, nome: str, email: str) -> Usuario:
        """Insere direto no estado confirmado, fora de transacao."""
        registro = {
            "id": self._proximo_id,
            "nome": nome,
            "email": email,
            "data_criacao": datetime.now(timezone.utc),
        }
        self._proximo_id += 1
        self._registros[registro["id"]] = registro
        self._confirmados = copy.deepcopy(self._registros)
        return Usuario(**registro)

    async def save(self, usuario: Usuario) -> Usuario:
        for registro in self._registros.values():
            if registro["email"] == usuario.email and registro["id"] != usuario.id:
                raise ViolacaoIntegridadeError(f"UNIQUE constraint failed: {usuario.email}")
        if usuario.id is None:
            usuario.id = self._proximo_id
            usuario.data_criacao = datetime.now(timezone.utc)
            self._proximo_id += 1
        self._registros[usuario.id] = {
            "id": usuario.id,
            "nome": usuario.nome,
            "email": usuario.email,
            "data_criacao": usuario.data_criacao,
        }
        return Usuario(**self._registros[usuario.id])

    async def find_by_id(self, usuario_id: int) -> Usuario | None:
        registro = self._registros.get(usuario_id)
        return Usuario(**registro) if registro else None

    async def find_all(self, paginacao: Paginacao) -> Pagina[Usuario]:
        registros = sorted(self._registros.values(), key=lambda r: r["id"])
        for ordem in reversed(paginacao.sort):
            atributo = CAMPOS_ORDENAVEIS[ordem.campo]
            registros.sort(key=lambda r: r[atributo], reverse=ordem.descendente)
        fatia = registros[paginacao.offset:paginacao.offset + paginacao.size]
        return Pagina(
            content=[Usuario(**r) for r in fatia],
            total_elements=len(registros),
            paginacao=paginacao,
        )

    async def exists_by_email(self, email: str) -> bool:
        self.consultas_email.append(email)
        return any(r["email"] == email for r in self._registros.values())

    async def exists_by_id(self, usuario_id: int) -> bool:
        return usuario_id in self._registros

    async def delete_by_id(self, usuario_id: int) -> None:
        self._registros.pop(usuario_id, None)

    async def commit(self) -> None:
        self._confirmados = copy.deepcopy(self._registros)
        self.commits += 1

    async def rollback(self) -> None:
        self._registros = copy.deepcopy(self._confirmados)
        self.rollbacks += 1


@pytest.fixture()
def gateway():
    return InMemoryUsuarioGateway()
