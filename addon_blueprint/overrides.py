"""
Addon Blueprint Overrides - Overlay staged files onto the generated test app
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def override_test_app_files(test_app_path: Path, overrides_path: Path) -> None:
    """
    Copy everything under overrides_path on top of test_app_path, then
    remove overrides_path.

    Files already in the test app that have no override are kept; only
    same-path files are replaced. The staging directory survives a failed
    copy.
    """
    # a move would replace the whole test app directory
    shutil.copytree(overrides_path, test_app_path, dirs_exist_ok=True)
    shutil.rmtree(overrides_path)
    logger.debug("Applied overrides from %s to %s", overrides_path, test_app_path)
