"""
Contrato de persistencia dos usuarios.

O servico recebe uma implementacao por injecao; testes usam um fake em memoria.
"""

from abc import ABC, abstractmethod

from app.models.usuario import Usuario
from app.pagination import Pagina, Paginacao

# campo exposto na API → atributo da entidade
CAMPOS_ORDENAVEIS: dict[str, str] = {
    "id": "id",
    "nome": "nome",
    "email": "email",
    "dataCriacao": "data_criacao",
}


class UsuarioGateway(ABC):
    """Acesso ao armazenamento de usuarios dentro de uma unidade de trabalho."""

    @abstractmethod
    async def save(self, usuario: Usuario) -> Usuario:
        """Insere (id vazio) ou atualiza e devolve o registro com id/data_criacao.

        Raises:
            ViolacaoIntegridadeError: restricao de unicidade violada
        """
        ...

    @abstractmethod
    async def find_by_id(self, usuario_id: int) -> Usuario | None:
        ...

    @abstractmethod
    async def find_all(self, paginacao: Paginacao) -> Pagina[Usuario]:
        ...

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        ...

    @abstractmethod
    async def exists_by_id(self, usuario_id: int) -> bool:
        ...

    @abstractmethod
    async def delete_by_id(self, usuario_id: int) -> None:
        ...

    @abstractmethod
    async def commit(self) -> None:
        ...

    @abstractmethod
    async def rollback(self) -> None:
        ...
