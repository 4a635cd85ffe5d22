from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import time
from functools import lru_cache

from emojisync.config import settings
from emojisync.exceptions import (
    GenerationError, InvalidNameError, StoreOperationError, StructuredOutputError,
    UnknownSearchMethodError
)
from emojisync.logging import get_logger, setup_logging
from emojisync.models import (
    EmbedRequest, EmbedResponse, InsertRequest, SearchResult, StatusResponse, UpdateRequest
)
from emojisync.service import EmojiService, build_service

setup_logging()
logger = get_logger(__name__)

app = FastAPI(
    title="emojisync",
    description="Emoji descriptions generated by an LLM, stored and searchable by similarity",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache(maxsize=1)
def get_service() -> EmojiService:
    return build_service(settings)


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add processing time to response headers."""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response


@app.exception_handler(StoreOperationError)
async def store_error_handler(request: Request, exc: StoreOperationError):
    logger.error(f"Store operation failed on {request.url.path}: {exc.error}")
    return JSONResponse(status_code=502, content={"detail": exc.error})


@app.exception_handler(StructuredOutputError)
async def structured_output_error_handler(request: Request, exc: StructuredOutputError):
    logger.error(f"Unparseable generation output on {request.url.path}: {exc}")
    return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.exception_handler(GenerationError)
async def generation_error_handler(request: Request, exc: GenerationError):
    logger.error(f"Generation unavailable on {request.url.path}: {exc}")
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.exception_handler(UnknownSearchMethodError)
async def unknown_method_handler(request: Request, exc: UnknownSearchMethodError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(InvalidNameError)
async def invalid_name_handler(request: Request, exc: InvalidNameError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "healthy", "timestamp": time.time()}


@app.get("/")
def root():
    """Root endpoint with API information."""
    return {
        "message": "emojisync",
        "version": "1.0.0",
        "collection": settings.COLLECTION_NAME,
        "search_method": settings.SEARCH_METHOD,
        "docs": "/docs",
        "health": "/health"
    }


@app.post("/embeddings/openai", response_model=EmbedResponse)
def embed_openai(request: EmbedRequest, service: EmojiService = Depends(get_service)):
    return EmbedResponse(embeddings=service.embed_openai(request.texts))


@app.post("/embeddings/local", response_model=EmbedResponse)
def embed_local(request: EmbedRequest, service: EmojiService = Depends(get_service)):
    return EmbedResponse(embeddings=service.embed_local(request.texts))


@app.post("/emojis/sync", response_model=StatusResponse)
def sync_seed_emojis(service: EmojiService = Depends(get_service)):
    """Generate and upsert descriptions for every seed emoji."""
    return StatusResponse(status=service.sync_all_seed_records())


@app.post("/emojis", response_model=StatusResponse)
def insert_emoji(request: InsertRequest, service: EmojiService = Depends(get_service)):
    return StatusResponse(status=service.insert_record(request.emoji))


@app.get("/emojis/search", response_model=SearchResult)
def find_matching_emoji(q: str, service: EmojiService = Depends(get_service)):
    return service.find_similar(q)


@app.put("/emojis/{key}", response_model=StatusResponse)
def update_emoji(key: str, request: UpdateRequest, service: EmojiService = Depends(get_service)):
    return StatusResponse(status=service.update_record(key, request.emoji, request.text))


@app.get("/emojis/{key}/emoji", response_model=StatusResponse)
def get_emoji(key: str, service: EmojiService = Depends(get_service)):
    return StatusResponse(status=service.get_record_token(key))


@app.post("/index/rebuild", response_model=StatusResponse)
def rebuild_index(service: EmojiService = Depends(get_service)):
    """Recompute the search index over the whole collection."""
    return StatusResponse(status=service.rebuild_index())
