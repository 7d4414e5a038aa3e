"""HTTP surface of the payment service.

`create_app` takes the store gateway as an argument so the process bootstrap
owns the connection pool and tests can pass an in-memory fake exposing the
same `ping`/`insert`/`now` operations.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from ridepay.common.config import settings
from ridepay.common.logging import logger, request_id_ctx
from ridepay.common.metrics import http_request_duration_seconds, http_requests_total, metrics_response
from ridepay.services.payments.errors import PaymentValidationError, ServiceUnavailable, StoreError
from ridepay.services.payments.schemas import HealthResponse, PaymentCreatedResponse, PaymentSubmission
from ridepay.services.payments.service import PaymentService, receipt_url


AVAILABLE_ENDPOINTS = [
    "/health (GET)",
    "/payments (POST)",
    "/metrics (GET)",
]


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _json(status_code: int, body: dict) -> JSONResponse:
    # Keys whose value is None are left out of the body entirely.
    return JSONResponse(status_code=status_code, content={k: v for k, v in body.items() if v is not None})


def create_app(store, check_store_on_startup: bool = True) -> FastAPI:
    """Build the FastAPI app around one store gateway."""

    service = PaymentService(store)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        """Refuse to start when the database cannot be reached."""

        if check_store_on_startup:
            try:
                db_time = await run_in_threadpool(store.now)
            except ServiceUnavailable as exc:
                logger.error("database_connection_failed error=%s", exc)
                raise
            logger.info("database_connected db_time=%s", db_time)
        yield

    app = FastAPI(title="ridepay Payments", lifespan=lifespan)
    app.state.service = service

    @app.middleware("http")
    async def availability_probe(request: Request, call_next):
        """Gate every route on a single store probe."""

        try:
            await run_in_threadpool(service.probe)
        except ServiceUnavailable:
            return _json(
                503,
                {
                    "success": False,
                    "error": "Service unavailable",
                    "message": "Database connection problem",
                },
            )
        return await call_next(request)

    @app.middleware("http")
    async def metrics_middleware(request: Request, call_next):
        """Record request count and latency for every HTTP call."""

        start = perf_counter()
        route = request.url.path
        method = request.method
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            route_obj = request.scope.get("route")
            if route_obj is not None and getattr(route_obj, "path", None):
                route = route_obj.path
            elif status_code == 404:
                # Unmatched paths share one label.
                route = "<unmatched>"
            return response
        finally:
            elapsed = max(0.0, perf_counter() - start)
            http_request_duration_seconds.labels(
                service=settings.service_name,
                route=route,
                method=method,
            ).observe(elapsed)
            http_requests_total.labels(
                service=settings.service_name,
                route=route,
                method=method,
                status_code=str(status_code),
            ).inc()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Authorization"],
        allow_credentials=True,
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        """Assign a request id and write one access log line per request."""

        request_id = request.headers.get("x-request-id") or str(uuid4())
        request.state.request_id = request_id
        token = request_id_ctx.set(request_id)
        start = perf_counter()
        try:
            response = await call_next(request)
            response.headers["x-request-id"] = request_id
            logger.info(
                "http_request method=%s path=%s status=%s duration_ms=%.1f",
                request.method,
                request.url.path,
                response.status_code,
                (perf_counter() - start) * 1000,
            )
            return response
        finally:
            request_id_ctx.reset(token)

    @app.exception_handler(PaymentValidationError)
    async def validation_error_handler(_: Request, exc: PaymentValidationError):
        return _json(400, {"error": exc.message, "details": exc.details})

    @app.exception_handler(RequestValidationError)
    async def malformed_body_handler(_: Request, exc: RequestValidationError):
        details = "; ".join(str(err.get("msg", "")) for err in exc.errors()) or "Body must be a JSON object"
        return _json(400, {"error": "Invalid request body", "details": details})

    @app.exception_handler(StoreError)
    async def store_error_handler(_: Request, exc: StoreError):
        return _json(
            500,
            {
                "success": False,
                "error": "Database error",
                "details": None if settings.is_production else exc.message,
                "code": exc.code,
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(_: Request, exc: StarletteHTTPException):
        # Unknown paths and unsupported methods on known paths are both "not found".
        if exc.status_code in (404, 405):
            return _json(
                404,
                {
                    "success": False,
                    "error": "Endpoint not found",
                    "availableEndpoints": AVAILABLE_ENDPOINTS,
                },
            )
        if exc.status_code == 400:
            # Body parsing failures raised by FastAPI itself.
            return _json(400, {"error": "Invalid request body", "details": str(exc.detail)})
        return _json(exc.status_code, {"success": False, "error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error("unhandled_error path=%s error=%s", request.url.path, exc, exc_info=exc)
        return _json(
            500,
            {
                "success": False,
                "error": "Internal server error",
                "timestamp": _utc_now(),
                "requestId": getattr(request.state, "request_id", None),
            },
        )

    @app.get("/health", response_model=HealthResponse)
    def health():
        """Liveness endpoint; only reached once the probe has succeeded."""

        return HealthResponse(timestamp=_utc_now())

    @app.post("/payments", status_code=201, response_model=PaymentCreatedResponse)
    def create_payment(submission: PaymentSubmission | None = None):
        """Record one payment and return it with its receipt link."""

        record = service.record_payment(submission or PaymentSubmission())
        return PaymentCreatedResponse(payment=record, receipt_url=receipt_url(record.id))

    @app.get("/metrics")
    def metrics():
        """Prometheus scrape endpoint."""

        return metrics_response()

    return app
