# fittrack/main.py
import time
import logging
import uuid
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from fittrack.routers.auth import router as auth_router
from fittrack.routers.workouts import router as workouts_router
from fittrack.routers.food import router as food_router
from fittrack.routers.dashboard import router as dashboard_router
from fittrack.settings import get_settings

log = logging.getLogger("uvicorn")

# Fails fast on missing SUPABASE_URL / SUPABASE_ANON_KEY / JWT_SECRET
settings = get_settings()

app = FastAPI(
    title="FitTrack API",
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None if settings.is_production else "/redoc",
    openapi_tags=[
        {"name": "auth", "description": "Registration & login"},
        {"name": "workouts", "description": "Workout sessions with exercises and sets"},
        {"name": "food", "description": "Food logging (placeholder)"},
        {"name": "dashboard", "description": "Dashboard insights (placeholder)"},
    ],
)


# CORS (relax for local dev; tighten origins in prod via env)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_methods=["*"],
    allow_headers=["Origin", "Content-Type", "Authorization", "X-Request-ID"],
)

@app.middleware("http")
async def add_request_id_and_log(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = req_id
    log.info("rid=%s %s %s -> %s in %.1fms",
             req_id, request.method, request.url.path, response.status_code, duration_ms)
    return response

@app.get("/")
def root():
    return {"ok": True, "name": "FitTrack API"}

@app.get("/health")
def health():
    return {"status": "healthy", "service": "fittrack-api"}

@app.get("/version")
def version():
    return {"version": settings.API_VERSION}

# Routers
app.include_router(auth_router)
app.include_router(workouts_router)
app.include_router(food_router)
app.include_router(dashboard_router)


def run() -> None:
    import uvicorn

    s = get_settings()
    log_level = "warning" if s.is_production else "info"
    uvicorn.run("fittrack.main:app", host="0.0.0.0", port=s.PORT, log_level=log_level)
