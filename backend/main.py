import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.database import criar_tabelas
from app.exceptions import (
    ArmazenamentoIndisponivelError,
    RecursoNaoEncontradoError,
    ValidacaoError,
)
from app.routers import usuarios

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Mensagens para campos obrigatorios ausentes do corpo
_CAMPOS_OBRIGATORIOS = {
    "nome": "Nome é obrigatório",
    "email": "Email é obrigatório",
}


@asynccontextmanager
async def lifespan(_app: FastAPI):
    if settings.CREATE_TABLES_ON_STARTUP:
        await criar_tabelas()
        logger.info("Tabelas verificadas em %s", settings.DATABASE_URL.split("@")[-1])
    yield


app = FastAPI(
    title="API de Usuarios",
    version="1.0.0",
    docs_url="/api/docs",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(usuarios.router, prefix="/api")


@app.exception_handler(RecursoNaoEncontradoError)
async def nao_encontrado_handler(_request: Request, exc: RecursoNaoEncontradoError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"message": exc.message})


@app.exception_handler(ValidacaoError)
async def validacao_handler(_request: Request, exc: ValidacaoError):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": exc.message})


@app.exception_handler(ArmazenamentoIndisponivelError)
async def armazenamento_handler(request: Request, exc: ArmazenamentoIndisponivelError):
    logger.error("Falha de armazenamento em %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"message": "Serviço temporariamente indisponível"},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(_request: Request, exc: RequestValidationError):
    errors: dict[str, str] = {}
    for erro in exc.errors():
        campo = str(erro["loc"][-1]) if erro.get("loc") else "body"
        if erro.get("type") == "missing" and campo in _CAMPOS_OBRIGATORIOS:
            mensagem = _CAMPOS_OBRIGATORIOS[campo]
        else:
            mensagem = erro.get("msg", "Valor inválido")
        errors.setdefault(campo, mensagem)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Erro de validação", "errors": errors},
    )


@app.get("/api/health")
async def health():
    return {"status": "ok"}
