import logging

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised when the loaded configuration fails validation"""


class WorkflowAborted(Exception):
    """Raised when the login workflow should stop before reaching the dashboard"""
    def __init__(self, status: str, message: str = "Workflow aborted", success: bool = False):
        self.status = status
        self.message = message
        self.success = success
        super().__init__(self.message)

    def display_abort_message(self):
        """Log a formatted summary of why the workflow stopped"""
        log = logger.info if self.success else logger.error
        log("=" * 60)
        log(f"Login workflow stopped: {self.status}")
        log(f"Reason: {self.message}")
        log("=" * 60)
