"""Engine e sessao assincronas do SQLAlchemy."""

from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from app.config import settings


# Maior valor de coluna inteira de 64 bits (ids, offsets)
MAIOR_INTEIRO_BANCO = 2**63 - 1


class Base(DeclarativeBase):
    pass


def _engine_kwargs() -> dict:
    # Arquivo SQLite nao compartilha conexoes entre event loops
    if settings.is_sqlite:
        return {"poolclass": NullPool}
    return {"pool_pre_ping": True}


engine = create_async_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO, **_engine_kwargs())
async_session = async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


async def get_db() -> AsyncIterator[AsyncSession]:
    async with async_session() as session:
        yield session


async def criar_tabelas() -> None:
    """Cria as tabelas mapeadas que ainda nao existem."""
    import app.models  # noqa: F401  registra os modelos no metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
