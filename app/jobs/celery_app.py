"""
Celery application for gateway background jobs.

Development keeps everything in memory and runs jobs eagerly in the web
process. Other environments store the queue and results in the relational
database named by the "hangfire" connection string, and need a worker:

    celery -A jobs.celery_app worker --beat
"""
import logging
from typing import Optional

from celery import Celery
from celery.schedules import crontab

from core.config import Settings, settings
from core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

PURGE_EXPIRED_FILES = "files.purge_expired"
PING = "gateway.ping"

MEMORY_BROKER = "memory://"
MEMORY_BACKEND = "cache+memory://"


def uses_memory_storage(app_settings: Settings) -> bool:
    return app_settings.is_development


def build_celery_config(app_settings: Settings) -> dict:
    """Celery configuration for the given gateway settings."""
    jobs = app_settings.jobs
    config = {
        "task_serializer": "json",
        "result_serializer": "json",
        "accept_content": ["json"],
        "timezone": "UTC",
        "enable_utc": True,
        "task_track_started": True,
        "result_extended": True,
        "worker_concurrency": jobs.worker_concurrency,
        "worker_prefetch_multiplier": 1,
        "beat_schedule": {},
    }

    if uses_memory_storage(app_settings):
        config.update({
            "broker_url": MEMORY_BROKER,
            "result_backend": MEMORY_BACKEND,
            "task_always_eager": True,
        })
    else:
        connection_string = app_settings.connection_strings.hangfire
        if not connection_string:
            raise ConfigurationError(
                "connection_strings.hangfire is required outside development"
            )
        config.update({
            "broker_url": f"sqla+{connection_string}",
            "result_backend": f"db+{connection_string}",
            "broker_transport_options": {
                "visibility_timeout": jobs.visibility_timeout,
                "polling_interval": jobs.poll_interval,
            },
            "database_engine_options": {"pool_pre_ping": True},
            "result_expires": jobs.registry_ttl_seconds,
        })

    if jobs.file_retention_days > 0:
        config["beat_schedule"]["purge-expired-files"] = {
            "task": PURGE_EXPIRED_FILES,
            "schedule": crontab(hour=3, minute=0),
            "args": (str(app_settings.files_root), jobs.file_retention_days),
        }
    return config


def create_celery_app(app_settings: Optional[Settings] = None) -> Celery:
    app_settings = app_settings or settings
    app = Celery("gateway", include=["jobs.tasks"])
    app.conf.update(build_celery_config(app_settings))
    logger.info(
        f"Job storage: {'memory' if uses_memory_storage(app_settings) else 'database'}"
    )
    return app


# Worker and beat entry point; web apps build their own from create_app settings
celery_app = create_celery_app(settings)
