import logging
import json
from contextvars import ContextVar

from .config import get_settings


class Counter:
    """Minimal Prometheus-style counter."""

    def __init__(self, name: str, documentation: str):
        self.name = name
        self.documentation = documentation
        self.value = 0.0

    def inc(self, amount: float = 1.0) -> None:
        self.value += amount

    def render(self) -> str:
        return (
            f"# HELP {self.name} {self.documentation}\n"
            f"# TYPE {self.name} counter\n"
            f"{self.name} {self.value}\n"
        )


# Context variable to store correlation id per request
correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")

_RESERVED_ATTRS = set(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"correlation_id", "message", "taskName"}


class JSONFormatter(logging.Formatter):
    """JSON log formatter including correlation id and ``extra`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        data = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": getattr(record, "correlation_id", ""),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                data[key] = value
        return json.dumps(data, default=str)


class CorrelationIdFilter(logging.Filter):
    """Inject correlation id from context into log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - trivial
        record.correlation_id = correlation_id_ctx.get("")
        return True


def configure_logging(level: str | None = None) -> None:
    """Send JSON records to stderr at ``level`` (``SEQLIST_LOG_LEVEL`` by default)."""
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    handler.addFilter(CorrelationIdFilter())
    logging.basicConfig(level=level or get_settings().log_level, handlers=[handler], force=True)


logger = logging.getLogger("seqlist.observability")

# Counters
OUT_OF_RANGE_COUNTER = Counter(
    "seqlist_out_of_range_total", "Number of operations rejected for an illegal position"
)
TRANSFORM_COUNTER = Counter(
    "seqlist_transforms_total", "Number of whole-list transforms applied"
)

COUNTERS = [
    OUT_OF_RANGE_COUNTER,
    TRANSFORM_COUNTER,
]

_settings = get_settings()
THRESHOLDS = {
    "seqlist_out_of_range_total": _settings.out_of_range_alert_threshold,
    "seqlist_transforms_total": _settings.transform_alert_threshold,
}


def _check_threshold(name: str, value: float) -> None:
    threshold = THRESHOLDS.get(name) or 0
    if threshold and value >= threshold:
        logger.warning(f"{name} threshold {threshold} reached")


def inc_out_of_range() -> None:
    OUT_OF_RANGE_COUNTER.inc()
    _check_threshold("seqlist_out_of_range_total", OUT_OF_RANGE_COUNTER.value)


def inc_transform() -> None:
    TRANSFORM_COUNTER.inc()
    _check_threshold("seqlist_transforms_total", TRANSFORM_COUNTER.value)


def generate_metrics() -> bytes:
    return "".join(counter.render() for counter in COUNTERS).encode()


CONTENT_TYPE_LATEST = "text/plain; version=0.0.4"


__all__ = [
    "correlation_id_ctx",
    "configure_logging",
    "inc_out_of_range",
    "inc_transform",
    "generate_metrics",
    "CONTENT_TYPE_LATEST",
    "logger",
]
