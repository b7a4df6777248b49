# logger_setup.py

import logging
import os

LOGGER_NAME = "fireworks"
RUN_ROOT = "runs"
LOG_FILE_NAME = "fireworks.log"

# Third-party loggers that only matter when they warn.
QUIET_LOGGERS = ("numba",)


def run_log_path(run_id: str, log_root: str = RUN_ROOT) -> str:
    """Path of the log file for one run: <log_root>/<run_id>/fireworks.log."""
    return os.path.join(log_root, run_id, LOG_FILE_NAME)


def _replace_handlers(logger: logging.Logger, handlers):
    # Re-running setup (tests, a restarted display) must not stack handlers
    # or leak the old file descriptor.
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    for handler in handlers:
        logger.addHandler(handler)


def setup_logging(config: dict, log_root: str = RUN_ROOT) -> logging.Logger:
    """
    Configures the "fireworks" logger for one run of the display.

    Burst launches, mode switches and loop start/idle transitions are logged
    at INFO; per-frame bookkeeping at DEBUG. Records go to the console and to
    a per-run file, and stay out of the root logger.

    Data Contract:
    - Inputs:
        - config (dict): The full loaded config. Uses 'run_id' and the
          'logging' section ('level', 'format').
        - log_root (str): Directory under which run folders are created.
    - Outputs: logging.Logger - The configured "fireworks" logger.
    - Side Effects: Creates <log_root>/<run_id>/ and opens the log file in
      append mode. Raises the numba logger to WARNING.
    """
    run_id = config['run_id']
    log_config = config['logging']
    log_file = run_log_path(run_id, log_root)
    os.makedirs(os.path.dirname(log_file), exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_config['level'])
    logger.propagate = False

    formatter = logging.Formatter(log_config['format'])
    handlers = [logging.FileHandler(log_file), logging.StreamHandler()]
    for handler in handlers:
        handler.setFormatter(formatter)
    _replace_handlers(logger, handlers)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.info(f"Logging initialized. Run ID: {run_id}. Log file: {log_file}")
    return logger
