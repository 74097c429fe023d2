from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cashier.api.v1.dashboard.router import router as dashboard_router
from cashier.api.v1.payments.router import router as payments_router
from cashier.api.v1.receipts.router import router as receipts_router
from cashier.api.v1.status.router import router as status_router
from cashier.api.v1.students.router import router as students_router
from cashier.core.config import settings
from cashier.core.logging import configure_logging


def create_app() -> FastAPI:
    configure_logging(settings)
    app = FastAPI(title="School Cashier")

    # CORS: allow the cashier front end to call this API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(students_router)
    app.include_router(payments_router)
    app.include_router(status_router)
    app.include_router(dashboard_router)
    app.include_router(receipts_router)

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"ok": True}

    return app


app = create_app()
