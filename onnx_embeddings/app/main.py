# onnx_embeddings/app/main.py
import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from onnx_embeddings.app.api_router import router
from onnx_embeddings.app.dependencies import get_embedding_service
from onnx_embeddings.settings import settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(pathname)s:%(lineno)d - %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)  # logger after de basicConfig


# --- Lifespan Context Manager ---
@asynccontextmanager
async def lifespan(app_instance: FastAPI):
    logger.info("Lifespan startup: Loading tokenizer and ONNX session...")
    service = get_embedding_service()
    logger.info(f"Lifespan startup: {service.variant.name} ready (dim={service.dim}).")
    yield
    logger.info("Lifespan shutdown: Cleaning up resources (if any)...")


app = FastAPI(title="ONNX Sentence Embeddings", lifespan=lifespan)


app.include_router(router, prefix="/api")


@app.get("/health")
async def health() -> dict:
    return {"status": "ok", "model": settings.model_variant}


if __name__ == "__main__":
    # default: host="0.0.0.0", port=8000
    uvicorn.run(
        "onnx_embeddings.app.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=True,
    )
