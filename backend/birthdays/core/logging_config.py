import logging
import os
import sys
from datetime import datetime

from birthdays.core.config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

def configure_logging(debug: bool = settings.DEBUG, log_dir: str = settings.LOG_DIR):
    """configure structured logging for the process, called once at startup"""
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(
            logging.FileHandler(os.path.join(log_dir, f'birthdays_{datetime.now().strftime("%Y%m%d")}.log'), mode='a')
        )

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )

def get_logger(name: str) -> logging.Logger:
    """get a configured logger instance"""
    return logging.getLogger(name)
