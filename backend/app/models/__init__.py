from app.models.usuario import Usuario

__all__ = ["Usuario"]
