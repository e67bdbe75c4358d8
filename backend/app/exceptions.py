"""
Erros de dominio da API de usuarios.

A traducao para status HTTP acontece somente nos handlers registrados em main.py.
"""


class UsuarioApiError(Exception):
    """Base para os erros que chegam ate a camada HTTP."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RecursoNaoEncontradoError(UsuarioApiError):
    """O id referenciado nao existe no momento da verificacao."""


class ValidacaoError(UsuarioApiError):
    """Dados enviados violam uma regra de negocio (campo obrigatorio, email duplicado)."""


class ArmazenamentoIndisponivelError(UsuarioApiError):
    """Falha de persistencia nao classificada. Fatal para a requisicao."""


class ViolacaoIntegridadeError(Exception):
    """Restricao do banco violada durante a escrita (ex.: email unico)."""
