"""Command-line entrypoint."""

import asyncio
import json
import logging
import sys
from typing import Any

from reqcore.adapters.driven.config.settings import Settings, load_settings
from reqcore.adapters.driven.logging.logging_config import configure_logs
from reqcore.adapters.driving.command import execute_batch
from reqcore.core.errors import ExecutorError
from reqcore.ports.result import ExecutionResult

__all__ = ["main", "render_outcome", "run"]

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_REJECTED_PAYLOAD = 2


def render_outcome(outcome: ExecutionResult | ExecutorError) -> dict[str, Any]:
    """Convert a batch entry to its JSON form.

    Args:
        outcome: Execution result or precondition error.

    Returns:
        Result payload, or ``{"error": ..., "kind": ...}`` for rejected requests.
    """
    if isinstance(outcome, ExecutorError):
        return {"error": str(outcome), "kind": outcome.kind}
    return outcome.to_payload()


def write_output(settings: Settings, document: Any) -> None:
    """Write the results document to the configured output."""
    text = json.dumps(document, ensure_ascii=False, indent=2)
    if settings.output_file_path:
        with open(settings.output_file_path, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        logger.info(f"Results written to {settings.output_file_path}")
    else:
        sys.stdout.write(text + "\n")


async def main() -> int:
    """Run the request executor over the configured payload file.

    Startup sequence:
    1. Configure logging.
    2. Load and validate configuration, then apply its log level.
    3. Execute every payload concurrently.
    4. Write the results.

    Returns:
        Process exit code.
    """
    configure_logs()

    try:
        config = load_settings()
    except (RuntimeError, ValueError) as exc:
        logger.error(
            "Configuration error: %s\n"
            "Hint: check PAYLOAD_FILE_PATH, LOG_LEVEL and that the payload file "
            "exists and is valid JSON.",
            exc,
        )
        return EXIT_CONFIG_ERROR

    logging.getLogger("reqcore").setLevel(config.log_level)
    logger.info(f"Executing {len(config.payloads)} request(s)...")

    outcomes = await execute_batch(config.payloads)
    rendered = [render_outcome(o) for o in outcomes]
    write_output(config, rendered if config.is_batch else rendered[0])

    failed = sum(1 for o in outcomes if isinstance(o, ExecutionResult) and o.is_transport_error)
    if failed:
        logger.warning(f"{failed} of {len(outcomes)} request(s) failed in transport")

    rejected = sum(1 for o in outcomes if isinstance(o, ExecutorError))
    if rejected:
        logger.error(f"{rejected} of {len(outcomes)} request(s) rejected before sending")
        return EXIT_REJECTED_PAYLOAD
    return EXIT_OK


def run() -> None:
    """Console script entrypoint."""
    try:
        raise SystemExit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Shutdown requested by user (Ctrl+C).")


if __name__ == "__main__":
    run()
