"""
Configuration module for the ENERGIX SER analysis core.
"""

import os
import logging
from typing import Dict

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8080/api"

# Configuration class
class Config:
    """Application configuration."""
    def __init__(self):
        # Backend used by the dashboard API client
        self.api_url: str = os.environ.get("ENERGIX_API_URL", DEFAULT_API_URL)

        # Display defaults
        self.default_locale: str = "fr-FR"
        self.default_currency: str = "TND"

        # SER objective, in percent of actual consumption
        self.default_improvement_goal: float = float(
            os.environ.get("ENERGIX_IMPROVEMENT_GOAL", "3")
        )

        self.log_level: str = os.environ.get("ENERGIX_LOG_LEVEL", "INFO").upper()

        self._post_init()

    def _post_init(self):
        """Validate configuration values after loading."""
        if self.default_improvement_goal < 0:
            logger.warning(
                f"Negative improvement goal {self.default_improvement_goal} ignored, using 3%"
            )
            self.default_improvement_goal = 3.0
        if not isinstance(logging.getLevelName(self.log_level), int):
            logger.warning(f"Unknown log level {self.log_level!r}, using INFO")
            self.log_level = "INFO"

# Label used when a record carries no month/matricule/type
UNKNOWN_LABEL = "Unknown"

# Estimated saving per litre of avoided consumption (local currency)
COST_SAVINGS_PER_LITER = 0.15

# R² thresholds used to qualify a backend regression
R_SQUARED_THRESHOLDS: Dict[str, float] = {
    'excellent': 0.7,
    'acceptable': 0.5,
}

# Create global config instance
config = Config()

# Configure logging
logging.basicConfig(
    level=config.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger.debug(f"Backend API URL: {config.api_url}")
