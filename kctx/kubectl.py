import logging
import subprocess
from typing import List

from kctx.exceptions import ExternalCommandError
from kctx.models import Context, parse_contexts

logger = logging.getLogger(__name__)

KUBECTL = "kubectl"


def run_kubectl(*args: str) -> str:
    """Run kubectl with args and return its stdout.

    Raises ExternalCommandError if kubectl cannot be started or exits non-zero.
    """
    command = [KUBECTL, *args]
    logger.debug("Running: %s", " ".join(command))
    try:
        result = subprocess.run(command, capture_output=True, encoding="utf-8", errors="replace")
    except OSError as exc:
        raise ExternalCommandError(str(exc), command=command) from exc

    logger.debug("Return code: %s", result.returncode)
    if result.returncode != 0:
        message = (result.stderr or "").strip() or (result.stdout or "").strip()
        raise ExternalCommandError(
            message or f"exit status {result.returncode}",
            command=command,
            returncode=result.returncode,
        )
    return result.stdout


def list_contexts() -> List[Context]:
    """Return every configured context, in kubectl's order"""
    output = run_kubectl("config", "get-contexts", "--no-headers=true")
    contexts = parse_contexts(output)
    logger.debug("Parsed %d context(s)", len(contexts))
    return contexts


def use_context(name: str) -> None:
    """Make name the active context"""
    run_kubectl("config", "use-context", name)
