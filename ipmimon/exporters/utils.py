"""Utility functions for exporters - tool availability checks"""
import logging
import os
import shutil

logger = logging.getLogger(__name__)


def is_tool_available(path: str) -> bool:
    """Check that a command name resolves on PATH, or that an explicit path is executable"""
    if not path:
        return False

    if os.sep in path:
        available = os.path.isfile(path) and os.access(path, os.X_OK)
    else:
        available = shutil.which(path) is not None

    logger.debug(f"{path} availability: {'PASS' if available else 'FAIL'}")
    return available
