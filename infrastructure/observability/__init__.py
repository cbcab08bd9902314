from . import metrics
from .logging_config import configure_logging

__all__ = ["metrics", "configure_logging"]
