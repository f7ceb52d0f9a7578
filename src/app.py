"""Payments FastAPI application.

Serves the gateway webhook endpoint and the client-initiated checkout API.
Each request is wrapped in the payments domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from payments.domain import payments  # noqa: E402
from payments.utils.logging import add_context, clear_context
from protean.integrations.fastapi import register_exception_handlers

payments.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Payments API",
    description="Gateway webhook reconciliation and checkout",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the payments domain context and a request id for payment routes."""
    if request.url.path.startswith("/payments"):
        add_context(request_id=request.headers.get("X-Request-ID") or uuid4().hex[:12])
        try:
            with payments.domain_context():
                response = await call_next(request)
        finally:
            clear_context()
        return response
    # Health check, docs, etc.
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from payments.api.routes import payment_router  # noqa: E402

app.include_router(payment_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "payments": {"name": payments.name},
            },
        }
    )
