"""
songapp/main.py

"""


from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging
from songapp.core.config import settings
from songapp.core.database import connect_to_mongo, close_mongo_connection
from songapp.api import api_router
from songapp.stores import create_song_store



# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    if settings.STORE_BACKEND == "mongo":
        await connect_to_mongo()
    app.state.song_store = create_song_store()
    logger.info(f"Using '{settings.STORE_BACKEND}' song store")
    yield
    # Shutdown
    await app.state.song_store.close()
    if settings.STORE_BACKEND == "mongo":
        await close_mongo_connection()

# Create FastAPI app.
app = FastAPI(
    title=settings.APP_NAME,
    lifespan=lifespan,
    debug=settings.DEBUG
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Invalid bodies are a 400 with a generic message"""
    logger.info(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid song data"},
    )

app.include_router(api_router, prefix="/api")

@app.get("/")
async def root():
    return {"message": "Welcome to the Song Manager API"}

@app.get("/health")
async def health_check():
    return {"status": "OK", "message": "Backend is running"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
