import logging

LOGGER_NAME = "radio_sync"
logger = logging.getLogger(LOGGER_NAME)


def log_section(title: str) -> None:
    """Top-level section header."""
    logger.info("")
    logger.info("=== %s ===", title)


def log_info(message: str) -> None:
    logger.info("%s", message)


def log_step(message: str) -> None:
    """Action step / ongoing work."""
    logger.info("→ %s", message)


def log_success(message: str) -> None:
    logger.info("✅ %s", message)


def log_warning(message: str) -> None:
    """Non-fatal problem, the run carries on."""
    logger.warning("⚠️ %s", message)


def log_error(message: str) -> None:
    """Fatal problem, the run is aborted."""
    logger.error("❌ %s", message)


def log_progress(current: int, total: int, prefix: str = "") -> None:
    """
    Progress line suitable for plain logs.

    Example:
      log_progress(3, 40, prefix="Searching")
      -> "Searching 3/40 (7.5%)"
    """
    if total <= 0:
        total = 1

    fraction = max(0.0, min(1.0, current / total))
    percent = fraction * 100

    if prefix:
        logger.info("%s %d/%d (%.1f%%)", prefix, current, total, percent)
    else:
        logger.info("%d/%d (%.1f%%)", current, total, percent)
