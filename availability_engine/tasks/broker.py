"""TaskIQ broker configuration."""

from taskiq import TaskiqScheduler
from taskiq.schedule_sources import LabelScheduleSource
from taskiq_postgresql import PostgresqlBroker

from availability_engine.config import settings

# Create PostgreSQL broker
broker = PostgresqlBroker(
    dsn=settings.SYNC_DATABASE_URL,
)

# Picks up the `schedule` labels declared on tasks
scheduler = TaskiqScheduler(
    broker=broker,
    sources=[LabelScheduleSource(broker)],
)

