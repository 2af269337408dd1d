# school_quiz/main.py
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core.config import config
from .core.database import get_document_store, close_document_store
from .core.ai_services import get_ai_service, close_ai_service
from .core.exceptions import (
    GenerationError, PersistenceError, SessionNotFoundError, SessionStateError
)
from .api.routes import router
from .services.test_service import get_test_service, close_test_service

# Setup logging
logging.basicConfig(
    level=getattr(logging, os.getenv('LOG_LEVEL', 'INFO')),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    logger.info("🚀 School Quiz API starting...")

    validation = config.validate()
    if not validation["valid"]:
        raise RuntimeError(f"Configuration invalid: {validation['issues']}")
    logger.info("✅ Configuration validated")

    store = get_document_store()
    store_health = store.validate_connection()
    if not store_health["overall"]:
        raise RuntimeError(f"Document store validation failed: {store_health}")
    logger.info(f"✅ Document store ready ({store_health.get('mode')})")

    get_ai_service()
    logger.info("✅ AI service ready")
    logger.info(f"📊 Generation: batches of {config.GENERATION_BATCH_SIZE}, "
                f"{config.DEFAULT_QUESTION_COUNT} questions by default")

    yield

    # Cleanup on shutdown
    logger.info("👋 Shutting down...")
    close_test_service()
    close_ai_service()
    close_document_store()
    logger.info("✅ Graceful shutdown completed")

# Create FastAPI application
app = FastAPI(
    title=config.API_TITLE,
    description=config.API_DESCRIPTION,
    version=config.API_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
cors_origins = os.getenv('CORS_ORIGINS', 'http://localhost:5173').split(',')

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(router)

def _error_response(status_code: int, error: str, message: str, error_type: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "message": message,
            "type": error_type
        }
    )

# Exception handlers
@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    """Handle validation errors"""
    logger.warning(f"Validation error: {exc}")
    return _error_response(400, "Validation Error", str(exc), "validation_error")

@app.exception_handler(SessionNotFoundError)
async def session_not_found_handler(request: Request, exc: SessionNotFoundError):
    return _error_response(404, "Session Not Found", str(exc), "not_found_error")

@app.exception_handler(SessionStateError)
async def session_state_handler(request: Request, exc: SessionStateError):
    logger.warning(f"Session state error: {exc}")
    return _error_response(409, "Invalid Session State", str(exc), "session_state_error")

@app.exception_handler(GenerationError)
async def generation_error_handler(request: Request, exc: GenerationError):
    logger.error(f"Question generation failed: {exc}")
    return _error_response(502, "Generation Failed", str(exc), "generation_error")

@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError):
    logger.error(f"Storage failure: {exc}")
    return _error_response(503, "Storage Unavailable", "Could not read or write saved data", "persistence_error")

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return _error_response(500, "Internal Server Error", "An unexpected error occurred", "server_error")

@app.get("/health")
async def health_check():
    """Comprehensive health check"""
    health_status = {
        "status": "healthy",
        "service": "school_quiz_api",
        "version": config.API_VERSION,
    }

    try:
        test_health = get_test_service().health_check()
        health_status["test_service"] = test_health["status"]
        health_status["active_sessions"] = test_health.get("active_sessions", 0)
    except Exception as e:
        health_status["test_service"] = "error"
        logger.warning(f"Test service health check failed: {e}")

    try:
        health_status["ai_service"] = get_ai_service().health_check()["status"]
    except Exception as e:
        health_status["ai_service"] = "error"
        logger.warning(f"AI service health check failed: {e}")

    try:
        store_health = get_document_store().validate_connection()
        health_status["database"] = "healthy" if store_health["overall"] else "degraded"
    except Exception as e:
        health_status["database"] = "error"
        logger.warning(f"Database health check failed: {e}")

    return health_status

if __name__ == "__main__":
    import uvicorn

    host = os.getenv('API_HOST', '0.0.0.0')
    port = int(os.getenv('API_PORT', '8070'))
    debug_mode = os.getenv('DEBUG_MODE', 'false').lower() == 'true'

    logger.info("🚀 Starting School Quiz API")
    logger.info(f"🌐 Server: http://{host}:{port}")
    logger.info(f"📚 Docs: http://{host}:{port}/docs")

    uvicorn.run(
        "school_quiz.main:app",
        host=host,
        port=port,
        reload=debug_mode,
        log_level=os.getenv('LOG_LEVEL', 'info').lower(),
        access_log=debug_mode
    )
