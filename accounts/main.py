from contextlib import asynccontextmanager
from fastapi import FastAPI

from accounts.domain.messages import verify_catalog
from accounts.infrastructure.db.pool import get_pool, close_pool
from accounts.infrastructure.email.activation_notifier import EmailActivationNotifier
from accounts.infrastructure.email.http_smtp_adapter import HttpSmtpEmailAdapter
from accounts.infrastructure.http.client import (
    close_http_client,
    open_http_client,
    get_http_client,
)
from accounts.logging import setup_logging
from accounts.presentation.api import api
from accounts.presentation.errors import install_error_handlers
from accounts.settings import get_settings

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    pool = get_pool()
    if getattr(pool, "closed", True):
        await pool.open()

    await open_http_client()

    # One shared email adapter on top of the shared HTTP client
    email_adapter = HttpSmtpEmailAdapter(
        base_url=settings.smtp_base_url,
        client=get_http_client(),
    )
    app.state.notifier = EmailActivationNotifier(
        email_adapter, sender=settings.mail_from
    )

    try:
        yield
    finally:
        # shutdown
        await email_adapter.aclose()  # it won't close the shared client
        await close_http_client()  # closes the shared client
        await close_pool()


def create_app() -> FastAPI:
    setup_logging(settings.log_level)
    verify_catalog()
    app = FastAPI(title="Accounts API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    install_error_handlers(app)
    app.include_router(api)
    return app


app = create_app()
