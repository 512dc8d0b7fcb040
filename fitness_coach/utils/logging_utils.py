import logging
from fitness_coach.config import config

def setup_logging():
    """
    Configure logging level based on debug mode setting.
    Non-debug mode uses WARNING level so that per-rep messages stay quiet.
    Debug mode uses INFO level for transitions, reps and session changes.
    """
    if config.debug_mode == "non_debug":
        level = logging.WARNING
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    logger = logging.getLogger("fitness_coach")
    logger.setLevel(level)
    return logger

def apply_debug_mode():
    """Re-apply the level after config.setup_from_args() changed the mode"""
    logger.setLevel(logging.WARNING if config.debug_mode == "non_debug" else logging.INFO)

# Global logger instance - import this in other modules
logger = setup_logging()
