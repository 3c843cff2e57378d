import logging.config
from pathlib import Path
from typing import Optional
from app.core.config import settings

MAX_LOG_BYTES = 10485760
LOG_BACKUPS = 5


def build_logging_config(log_dir: str, level: str = "INFO") -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "detailed": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "detailed",
                "stream": "ext://sys.stdout"
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": level,
                "formatter": "detailed",
                "filename": f"{log_dir}/app.log",
                "maxBytes": MAX_LOG_BYTES,
                "backupCount": LOG_BACKUPS
            },
            "error_file": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "ERROR",
                "formatter": "detailed",
                "filename": f"{log_dir}/error.log",
                "maxBytes": MAX_LOG_BYTES,
                "backupCount": LOG_BACKUPS
            },
            # Snapshot builds, legacy recomputes and stale-row cleanup
            "snapshot_file": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "DEBUG",
                "formatter": "detailed",
                "filename": f"{log_dir}/leaderboard_snapshot.log",
                "maxBytes": MAX_LOG_BYTES,
                "backupCount": LOG_BACKUPS
            }
        },
        "root": {
            "level": level,
            "handlers": ["console", "file", "error_file"]
        },
        "loggers": {
            "app": {
                "level": level,
                "handlers": ["console", "file", "error_file"],
                "propagate": False
            },
            "app.services.leaderboard_snapshot": {
                "level": "DEBUG",
                "handlers": ["snapshot_file"],
                "propagate": True
            },
            "app.services.leaderboard_board": {
                "level": "DEBUG",
                "handlers": ["snapshot_file"],
                "propagate": True
            },
            "app.crud.leaderboard_snapshot": {
                "level": "INFO",
                "handlers": ["snapshot_file"],
                "propagate": True
            },
            "uvicorn.access": {
                "level": "WARNING",
                "handlers": ["console"],
                "propagate": False
            }
        }
    }


def configure_logging(log_dir: Optional[str] = None, level: Optional[str] = None):
    log_dir = log_dir or settings.LOG_DIR
    Path(log_dir).mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(build_logging_config(log_dir, level or settings.LOG_LEVEL))
