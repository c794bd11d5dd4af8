import logging
import sys
from logging.handlers import RotatingFileHandler
import os
from pathlib import Path

LOG_FORMAT = '%(asctime)s [%(levelname)7s] %(filename)16s:%(lineno)4d [%(name)10s - %(funcName)12s] : %(message)s'


def resolve_level(level):
    """Accept either a logging constant or a level name such as 'debug'."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def _resolve_logs_dir() -> Path:
    # LOG_DIR overrides the default <project>/logs placement (container deployments)
    log_dir_env = os.environ.get('LOG_DIR')
    if log_dir_env:
        logs_dir = Path(log_dir_env)
    else:
        logs_dir = Path(__file__).resolve().parents[1] / 'logs'
    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        logs_dir = Path(os.getcwd())
    return logs_dir


def setup_logger(name='SimpleWebApp', log_file='simple_web_app.log', level=None):
    """
    Configure a named logger with console and rotating file output.
    """
    if level is None:
        level = os.environ.get('LOG_LEVEL', 'INFO')
    logger = logging.getLogger(name)
    logger.setLevel(resolve_level(level))

    # handlers already attached: avoid duplicates on re-import
    if logger.hasHandlers():
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    # 1. console handler
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    # 2. rotating file handler
    log_path = Path(log_file)
    if not log_path.is_absolute():
        log_path = _resolve_logs_dir() / log_path

    file_handler = RotatingFileHandler(
        str(log_path),
        maxBytes=5*1024*1024,
        backupCount=3,
        encoding='utf-8'
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    return logger


def get_logger(name='SimpleWebApp', log_file='simple_web_app.log', level=None):
    return setup_logger(name=name, log_file=log_file, level=level)

# module-wide logger for the API service
log = get_logger()
