"""
Company Search Service

FastAPI app serving the company listing, filter options and stats endpoints
"""
from contextlib import asynccontextmanager
import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from company_search.config import settings
from company_search.router.companies import router as companies_router

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        f"Serving table '{settings.companies_table}' at "
        f"{settings.api_prefix or ''}/companies (auth_required={settings.auth_required})"
    )
    yield


app = FastAPI(
    title="Company Search",
    description="Filter, sort and page through the business register",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(companies_router, prefix=settings.api_prefix)


@app.get("/health")
async def health_check():
    return {"status": "healthy", "table": settings.companies_table}


@app.exception_handler(Exception)
async def unhandled_exception(request, exc):
    """Anything the routes did not map to a fixed message"""
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def run():
    """Console entry point"""
    import uvicorn

    uvicorn.run(
        "company_search.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level
    )


if __name__ == "__main__":
    run()
