import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv
import uvicorn

from database import init_db
from logging_config import setup_logging
from routers import tenants_router

# Load .env
load_dotenv()
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # For production, run Alembic migrations and set INIT_DB=false
    if os.getenv("INIT_DB", "true").lower() == "true":
        init_db()
    yield


# App instance
app = FastAPI(title="CondoEase", lifespan=lifespan)

# CORS
origins = [origin for origin in os.getenv("CORS_ORIGINS", "").split(",") if origin]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(tenants_router)

# 404 Fallback Middleware (unmatched routes only; route handlers keep their own detail)
@app.middleware("http")
async def not_found_middleware(request: Request, call_next):
    response = await call_next(request)
    if response.status_code == 404 and request.scope.get("endpoint") is None:
        return JSONResponse(status_code=404, content={"error": "Route not found"})
    return response


if __name__ == "__main__":
    port = int(os.getenv("PORT", 10000))
    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=True)
