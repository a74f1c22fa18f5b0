"""
Cleanup: delete a job's temporary audio artifacts.
"""

import shutil
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

_ARTIFACT_DIRS = ['source', 'normalized']


def cleanup_job_artifacts(job_workspace: Path, keep_debug: bool = False):
    """
    Delete job artifacts after completion (success or failure).

    Audio directories are always deleted. With keep_debug, anything else in
    the workspace (e.g. meta/) is kept; otherwise the workspace is removed.
    """
    if not job_workspace.exists():
        return

    for dirname in _ARTIFACT_DIRS:
        dir_path = job_workspace / dirname
        if dir_path.exists():
            try:
                shutil.rmtree(dir_path)
                logger.debug("Deleted: %s", dir_path)
            except OSError as e:
                logger.warning("Failed to delete %s: %s", dir_path, e)

    if keep_debug:
        return

    try:
        shutil.rmtree(job_workspace)
        logger.debug("Removed workspace: %s", job_workspace)
    except OSError as e:
        logger.warning("Failed to remove workspace %s: %s", job_workspace, e)
