"""Process entry point: answer the match driver over stdin/stdout."""

from __future__ import annotations

import logging
import random
import sys

from salvo.game.ai.targeting import TargetingContractError, TargetingEngine
from salvo.game.app.protocol import ProtocolError, ProtocolSession, run
from salvo.game.infra.config import load_config, load_default_env_files
from salvo.game.infra.logging import setup_logging, shutdown_logging

logger = logging.getLogger(__name__)


def main() -> int:
    """Run the targeting process until input ends."""
    load_default_env_files()
    config = load_config()
    setup_logging(config)
    if config.seed is not None:
        logger.info("search_seed=%d", config.seed)

    session = ProtocolSession(
        TargetingEngine(random.Random(config.seed)),
        strict_coordinates=config.strict_coordinates,
    )
    try:
        responses = run(sys.stdin, sys.stdout, session)
        logger.info("input_closed responses=%d", responses)
    except (ProtocolError, TargetingContractError):
        logger.exception("fatal_protocol_error")
        return 1
    finally:
        shutdown_logging()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
