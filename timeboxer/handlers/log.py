"""Handler that only writes to the log."""

import logging
from typing import Optional


class LogHandler:
    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def __call__(self, step_index: int, step_count: int) -> None:
        if step_index == 0:
            self.logger.info("New interval occurred.")
        self.logger.info(f"Step {step_index} of {step_count} occurred.")
