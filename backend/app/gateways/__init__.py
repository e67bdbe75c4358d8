from app.gateways.base import CAMPOS_ORDENAVEIS, UsuarioGateway
from app.gateways.sql import SqlAlchemyUsuarioGateway

__all__ = ["CAMPOS_ORDENAVEIS", "UsuarioGateway", "SqlAlchemyUsuarioGateway"]
