"""
Logging configuration module.
config.yaml의 logging 섹션을 읽어 콘솔/파일 핸들러를 설정한다.
"""
import logging
import logging.handlers
from pathlib import Path

from .config_loader import get_config

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_DATE_FORMAT = "%H:%M:%S"


def _level(name: str, fallback: int) -> int:
    return getattr(logging, str(name).upper(), fallback)


def setup_logging(name: str = None) -> logging.Logger:
    """
    로깅 시스템 설정 및 로거 반환

    Args:
        name: 로거 이름 (일반적으로 __name__ 사용)

    Returns:
        logging.Logger: 설정된 로거 객체
    """
    logger = logging.getLogger(name or 'facemesh_viewer')

    # 이미 핸들러가 설정되어 있으면 중복 설정 방지
    if logger.handlers:
        return logger

    log_config = get_config().get('logging', {}) or {}
    console_config = log_config.get('console', {}) or {}
    file_config = log_config.get('file', {}) or {}

    logger.setLevel(_level(log_config.get('level', 'INFO'), logging.INFO))
    logger.propagate = log_config.get('propagate', True)

    formatter = logging.Formatter(
        log_config.get('format', DEFAULT_FORMAT),
        datefmt=log_config.get('date_format', DEFAULT_DATE_FORMAT)
    )

    if console_config.get('enabled', True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(_level(console_config.get('level', 'INFO'), logging.INFO))
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if file_config.get('enabled', False):
        log_dir = Path(file_config.get('directory', 'logs'))
        log_dir.mkdir(parents=True, exist_ok=True)

        # RotatingFileHandler 사용
        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / file_config.get('filename', 'facemesh_viewer.log'),
            maxBytes=file_config.get('max_bytes', 5 * 1024 * 1024),
            backupCount=file_config.get('backup_count', 3),
            encoding='utf-8'
        )
        file_handler.setLevel(_level(file_config.get('level', 'DEBUG'), logging.DEBUG))
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = None) -> logging.Logger:
    """
    로거 가져오기 (간편 함수)

    Args:
        name: 로거 이름 (일반적으로 __name__ 사용)

    Returns:
        logging.Logger: 설정된 로거 객체
    """
    return setup_logging(name)
