from .paths import PROJECT_ROOT, SCENARIO_STORAGE_DIR, STORAGE_DIR, LOG_DIR, GAME_LOG_DIR
from .logger import configure_from_settings, configure_logging, get_logger
from .settings import Settings, load_settings

__all__ = [
    "PROJECT_ROOT",
    "STORAGE_DIR",
    "SCENARIO_STORAGE_DIR",
    "LOG_DIR",
    "GAME_LOG_DIR",
    "configure_from_settings",
    "configure_logging",
    "get_logger",
    "Settings",
    "load_settings",
]
