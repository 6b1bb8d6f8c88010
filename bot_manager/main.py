from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from bot_manager.core.config import settings
from bot_manager.core.database import init_db
from bot_manager.core.logging import setup_logging, RequestLoggingMiddleware
from bot_manager.api.api_v1.api import api_router
from bot_manager.views import auth, dashboard, bot_form, asset_search

setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(
    title=settings.app_name,
    version="1.0.0",
    description="Dashboard for managing trading bot configurations",
    lifespan=lifespan
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.secret_key,
    session_cookie=settings.session_cookie,
)
app.add_middleware(RequestLoggingMiddleware)

# API routes
app.include_router(api_router, prefix=settings.api_v1_str)

# HTML views
app.include_router(auth.router)
app.include_router(dashboard.router)
app.include_router(bot_form.router)
app.include_router(asset_search.router)


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "bot_manager.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )
