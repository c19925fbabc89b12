from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from . import api
from .observability import configure_logging, correlation_id_ctx

configure_logging()

app = FastAPI(title="Sequential List Workbench")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def correlation_id_middleware(request: Request, call_next):
    correlation_id = request.headers.get("X-Correlation-ID") or uuid4().hex
    token = correlation_id_ctx.set(correlation_id)
    try:
        response = await call_next(request)
    finally:
        correlation_id_ctx.reset(token)
    response.headers["X-Correlation-ID"] = correlation_id
    return response


app.include_router(api.router)
