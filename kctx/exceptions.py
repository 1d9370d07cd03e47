from typing import List, Optional


class KctxError(Exception):
    """Base class for kctx errors"""


class ExternalCommandError(KctxError):
    """A kubectl invocation could not run or exited non-zero"""

    def __init__(self, message: str, command: List[str] = None, returncode: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.command = command or []
        self.returncode = returncode


class StartupError(KctxError):
    """The terminal UI could not be started"""
