import traceback
from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

from flightproxy.config import settings
from flightproxy.errors import FlightProxyError, ValidationError
from flightproxy.obs.logger import log_event
from flightproxy.obs.metrics import get_metrics_snapshot
from flightproxy.obs.middleware import ObservabilityMiddleware
from flightproxy.search import SearchPipeline, create_search_pipeline
from flightproxy.validation import parse_query

load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.pipeline = create_search_pipeline(settings)
    if not settings.AMADEUS_CLIENT_ID or not settings.AMADEUS_CLIENT_SECRET:
        log_event("amadeus_credentials_missing", level="WARNING")
    log_event("startup", env=settings.APP_ENV, amadeus_base_url=settings.amadeus_base_url)
    yield
    log_event("shutdown")


def get_pipeline(request: Request) -> SearchPipeline:
    return request.app.state.pipeline


app = FastAPI(
    title="Flight Offer Proxy",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health():
    return {"ok": True}


@app.get("/metrics")
async def metrics():
    return get_metrics_snapshot()


@app.post("/api/search")
async def search(request: Request, pipeline: SearchPipeline = Depends(get_pipeline)):
    try:
        body = await request.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    try:
        query = parse_query(body)
        options = await pipeline.search(query)
    except ValidationError as e:
        log_event("search_rejected", level="WARNING", error=str(e))
        return JSONResponse({"ok": False, "error": str(e)}, status_code=400)
    except FlightProxyError as e:
        log_event("search_failed", level="ERROR", error_type=type(e).__name__, error=str(e))
        return JSONResponse({"ok": False, "error": str(e) or "Server error"}, status_code=500)
    except Exception as e:
        log_event(
            "search_crashed",
            level="ERROR",
            error_type=type(e).__name__,
            error=str(e),
            traceback=traceback.format_exc(),
        )
        return JSONResponse({"ok": False, "error": "Server error"}, status_code=500)

    return {"ok": True, "options": [o.to_public() for o in options]}


# Apply middleware
app = ObservabilityMiddleware(app)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.PORT,
        log_level="info",
    )
