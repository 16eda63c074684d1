"""Marathon training-plan engine and live-run tracker."""

from marathon_coach.config.settings import settings
from marathon_coach.core.logger import setup_logger

setup_logger(level=settings.log_level, log_file=settings.log_file)

__version__ = "0.1.0"
