from contextlib import asynccontextmanager
from fastapi import FastAPI
from dotenv import load_dotenv

load_dotenv()

from domain.config import get_notification_config, get_push_config
from application.scheduler import ExpiryNotificationScheduler
from application.service.check_expirations import CheckExpirationsService
from infrastructure.metrics.metrics import metrics_endpoint
from infrastructure.metrics.metrics_adapter import MetricsAdapter
from infrastructure.logging.logging_adapter import LoggingAdapter
from infrastructure.clients import PushNotificationClient, PushNotificationSink
from infrastructure.notifications import InMemoryToastFeed
from infrastructure.db.database import AsyncSessionLocal, CREATE_TABLES, create_tables
from infrastructure.db.repositories import (
    ContractRepoSqlalchemy,
    MonthlyPaymentRepoSqlalchemy,
    SettingsRepoSqlalchemy,
)
from app.routers.v1 import router

# Import database models to ensure they're registered
from infrastructure.db.models import Base, ContractModel, MonthlyPaymentModel, SystemSettingModel  # noqa: F401


def build_expiry_check(push_client: PushNotificationClient, toast_feed: InMemoryToastFeed):
    """One check cycle per call, each with its own database session."""
    config = get_notification_config()

    async def run_expiry_check():
        async with AsyncSessionLocal() as session:
            settings_repo = SettingsRepoSqlalchemy(session)
            srv = CheckExpirationsService(
                settings_repo=settings_repo,
                contract_repo=ContractRepoSqlalchemy(session),
                payment_repo=MonthlyPaymentRepoSqlalchemy(session),
                notification_port=PushNotificationSink(push_client, settings_repo),
                toast_port=toast_feed,
                config=config,
                metrics_port=MetricsAdapter(),
                logging_port=LoggingAdapter(),
            )
            return await srv.execute()

    return run_expiry_check


@asynccontextmanager
async def lifespan(app: FastAPI):
    if CREATE_TABLES:
        await create_tables()
    config = get_notification_config()
    push_config = get_push_config()
    push_client = PushNotificationClient(
        base_url=push_config.gateway_url,
        max_retries=push_config.max_retries,
        icon=config.icon,
    )
    scheduler = ExpiryNotificationScheduler(
        check=build_expiry_check(push_client, app.state.toast_feed),
        interval_seconds=config.check_interval_seconds,
        metrics_port=MetricsAdapter(),
        logging_port=LoggingAdapter(),
    )
    app.state.scheduler = scheduler
    if config.scheduler_enabled:
        scheduler.start()
    try:
        yield
    finally:
        await scheduler.aclose()
        await push_client.close()


app = FastAPI(title="rental-backoffice", lifespan=lifespan)
app.state.toast_feed = InMemoryToastFeed(max_size=get_notification_config().toast_feed_size)


@app.get("/metrics")
async def metrics():
    return metrics_endpoint()


@app.get("/health")
async def health():
    scheduler = getattr(app.state, "scheduler", None)
    return {
        "status": "ok",
        "message": "rental-backoffice is running",
        "notification_scheduler": "running" if scheduler and scheduler.is_running else "stopped",
    }

app.include_router(router)
