"""
Falhas do banco chegam ao cliente como 503 com mensagem generica.
"""

import pytest
from sqlalchemy.exc import OperationalError

from app.gateways.sql import SqlAlchemyUsuarioGateway
from app.routers.usuarios import get_usuario_service
from app.services.usuario_service import UsuarioService
from main import app as fastapi_app


class SessaoSemConexao:
    """Substitui a AsyncSession simulando banco fora do ar."""

    def __init__(self):
        self.rollbacks = 0

    def _falhar(self):
        raise OperationalError("SELECT 1", {}, ConnectionRefusedError("connection refused"))

    async def get(self, *args, **kwargs):
        self._falhar()

    async def execute(self, *args, **kwargs):
        self._falhar()

    async def commit(self):
        self._falhar()

    async def rollback(self):
        self.rollbacks += 1


@pytest.fixture()
def sessao(client):
    sessao = SessaoSemConexao()
    fastapi_app.dependency_overrides[get_usuario_service] = lambda: UsuarioService(
        SqlAlchemyUsuarioGateway(sessao)
    )
    yield sessao
    fastapi_app.dependency_overrides.clear()


@pytest.mark.parametrize(
    "metodo,caminho",
    [("get", "/api/usuarios"), ("get", "/api/usuarios/1"), ("delete", "/api/usuarios/1")],
)
def test_falha_de_banco_retorna_503(client, sessao, metodo, caminho):
    response = getattr(client, metodo)(caminho)

    assert response.status_code == 503
    assert response.json() == {"message": "Serviço temporariamente indisponível"}
    assert sessao.rollbacks == 1
