from jumphash.utils.config import Config, HasherConfig, ServiceConfig
from jumphash.utils.metrics import Metrics, MetricsCollector, Timer

__all__ = [
    "Config",
    "HasherConfig",
    "ServiceConfig",
    "Metrics",
    "MetricsCollector",
    "Timer",
]
