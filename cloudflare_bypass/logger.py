import logging
import sys
from datetime import datetime
from pathlib import Path


def setup_logging(log_dir: Path | None = None, level: int = logging.INFO) -> logging.Logger:
    """
    Configures logging to the console and, if `log_dir` is given, to a timestamped file.
    Configures the root logger so that every cloudflare_bypass module logs through it.
    """
    # 1. Create formatters
    # Detailed formatter for the file
    file_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    # Simpler formatter for the console
    console_formatter = logging.Formatter(
        '%(levelname)s - %(name)s - %(message)s'
    )

    # 2. Create handlers
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(console_formatter)
    console_handler.setLevel(level)
    handlers: list[logging.Handler] = [console_handler]

    log_file_path = None
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime('%Y-%m-%d_%H-%M-%S')
        log_file_path = log_dir / f"cloudflare_bypass-{timestamp}.log"

        file_handler = logging.FileHandler(log_file_path, 'w', encoding='utf-8')
        file_handler.setFormatter(file_formatter)
        file_handler.setLevel(level)
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        handlers=handlers,
        force=True  # Replace any existing configuration
    )

    logger = logging.getLogger("cloudflare_bypass")
    if log_file_path is not None:
        logger.info(f"Logging initialized. Log file: {log_file_path}")
    return logger
