"""Shared constants for the city planning engine."""

import numpy as np

# Selector names
STRATEGY_KRUSKAL = "kruskal"
STRATEGY_BORUVKA = "boruvka"
SUPPORTED_STRATEGIES = (STRATEGY_KRUSKAL, STRATEGY_BORUVKA)
DEFAULT_STRATEGY = STRATEGY_KRUSKAL

# Output
IMPOSSIBLE_MARKER = "Impossible"

# City ids are 1-based
FIRST_CITY_ID = 1
NO_PORT_COST = 0

# Highway costs are held in int64 columns
MAX_COST = int(np.iinfo(np.int64).max)

# Configuration
ENV_PREFIX = "PORTPLANNER_"
CONFIG_FILE_NAME = "portplanner.yaml"
SUPPORTED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Logging
SLOW_OPERATION_SECONDS = 1.0
DEFAULT_LOG_DIR = "./logs"
DEFAULT_LOG_FILE_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_LOG_FILE_BACKUP_COUNT = 5

VERSION = "1.0.0"
