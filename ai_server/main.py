import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ai_server import __version__
from ai_server.api.embed import router as embed_router
from ai_server.api.health import router as health_router
from ai_server.api.index import router as index_router
from ai_server.api.search import router as search_router
from ai_server.core.errors import EmbeddingUnavailable
from ai_server.core.logging import setup_logging
from ai_server.core.settings import settings
from ai_server.middleware import RequestContextMiddleware

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Travel AI Server", version=__version__)

app.add_middleware(RequestContextMiddleware)

app.include_router(health_router)
app.include_router(embed_router)
app.include_router(search_router)
app.include_router(index_router)


@app.exception_handler(EmbeddingUnavailable)
async def embedding_unavailable_handler(request: Request, exc: EmbeddingUnavailable):
    logger.error(f"Embedding model unavailable on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=503,
        content={"error": "embedding_unavailable", "detail": str(exc)},
    )


@app.get("/")
def root():
    return {
        "name": "travel-ai-server",
        "version": __version__,
        "endpoints": ["/health", "/embed", "/search", "/index", "/index/reload"],
    }


def run():
    import uvicorn

    uvicorn.run("ai_server.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
