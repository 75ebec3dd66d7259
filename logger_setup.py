# logger_setup.py

import logging
import os
import json

# Every module fetches the application logger by this name.
LOGGER_NAME = "fire_sim"


def load_config(config_path='config.json'):
    """
    Reads the per-run configuration file.

    Errors (missing file, bad JSON) propagate to the caller.
    """
    with open(config_path, 'r') as f:
        return json.load(f)


def setup_logging(config, log_root='runs'):
    """
    Configures the dedicated "fire_sim" logger for one run.

    The logger does not propagate to the root logger, so pygame and numpy
    chatter stays out of the run log. Records go to the console and to
    <log_root>/<run_id>/simulation.log.

    Data Contract:
    - Inputs:
        - config (dict | str): The loaded configuration, or a path to it.
        - log_root (str): Directory that holds one folder per run.
    - Outputs: The configured logging.Logger.
    - Side Effects: Creates the run folder. Replaces any handlers left on the
      logger by an earlier call, closing them first.
    - Invariants: The config holds 'run_id' and a 'logging' dictionary with
      'level' and 'format'.
    """
    if isinstance(config, (str, os.PathLike)):
        config = load_config(config)

    run_id = config['run_id']
    log_config = config['logging']

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_config['level'])
    logger.propagate = False

    log_dir = os.path.join(log_root, run_id)
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, 'simulation.log')

    formatter = logging.Formatter(log_config['format'])
    handlers = [
        logging.FileHandler(log_file, encoding='utf-8'),
        logging.StreamHandler(),
    ]

    for stale in list(logger.handlers):
        stale.close()
        logger.removeHandler(stale)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info(f"Logging initialized. Run ID: {run_id}. Log file: {log_file}")
    return logger
