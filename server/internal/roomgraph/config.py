"""
Configuration management for the room graph layout service.
"""

import os
from typing import Optional


class Config:
    """Configuration for the layout generation service"""

    def __init__(self):
        # Server configuration
        self.host = os.getenv("ROOMGRAPH_SERVICE_HOST", "0.0.0.0")
        self.port = int(os.getenv("ROOMGRAPH_SERVICE_PORT", "8082"))
        self.environment = os.getenv("ENVIRONMENT", "development")
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

        # Generation configuration
        # Used when a request does not carry its own seed
        self.default_seed: Optional[str] = os.getenv("DEFAULT_SEED") or None


def load_config() -> Config:
    """Load configuration from environment variables"""
    return Config()
