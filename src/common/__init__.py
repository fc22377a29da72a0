# Common utilities
from .config_loader import load_catalog_settings, load_config
from .log_config import setup_logging
from .store_id import to_positive_int
