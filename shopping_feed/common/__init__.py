# Common utilities
from .config_loader import ConfigurationError, FeedSettings, load_config, load_settings
from .log_config import setup_logging
from .text_utils import strip_html
