"""アプリケーションのエントリポイント

Replays a JSON Lines file of records through the digest pipeline:

    {"type": "conversation", "id": "conv-1", "interfaceType": "cli", ...}
    {"type": "digest", "payload": {"conversationId": "conv-1", ...}}

Conversation records are stored for metadata lookup; digest records are
queued as DIGEST events and processed in file order.
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from summarylog.application.handlers import DigestEventHandler
from summarylog.application.use_cases import ProcessDigestUseCase
from summarylog.config import ConfigError, LoggingConfig, load_config
from summarylog.domain.entities import Event, EventType
from summarylog.infrastructure.events import (
    ConversationPayload,
    EventDispatcher,
    EventLoop,
    EventQueue,
)
from summarylog.infrastructure.llm import LLMDecisionEngine, create_structured_generator
from summarylog.infrastructure.persistence import (
    DatabaseManager,
    SQLiteConversationRepository,
    SQLiteSummaryRepository,
)

# Default logging for early startup
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def configure_logging(config: LoggingConfig | None) -> None:
    """Configure logging based on config.

    Args:
        config: Logging configuration. If None, uses defaults.
    """
    if config is None:
        return

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, config.level.upper(), logging.INFO))

    if root_logger.handlers:
        formatter = logging.Formatter(config.format)
        for handler in root_logger.handlers:
            handler.setFormatter(formatter)

    if config.loggers:
        for logger_name, logger_level in config.loggers.items():
            logging.getLogger(logger_name).setLevel(
                getattr(logging, logger_level.upper(), logging.INFO)
            )
            logger.debug(
                "Set logger '%s' to level %s", logger_name, logger_level.upper()
            )


def read_records(path: Path) -> list[dict[str, Any]]:
    """Read JSON Lines records, skipping blank lines.

    Raises:
        ValueError: A line is not a JSON object.
    """
    records = []
    with open(path, encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError as e:
                raise ValueError(f"{path}:{line_number}: invalid JSON: {e}") from e
            if not isinstance(record, dict):
                raise ValueError(f"{path}:{line_number}: expected a JSON object")
            records.append(record)
    return records


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="summarylog",
        description="Fold conversation digests into summary logs.",
    )
    parser.add_argument("events", type=Path, help="JSON Lines file of records")
    parser.add_argument(
        "--config", type=Path, default=Path("config.yaml"), help="config file"
    )
    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> None:
    """アプリケーションを起動する"""
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except (ConfigError, FileNotFoundError) as e:
        logger.error("Failed to load config: %s", e)
        sys.exit(1)

    configure_logging(config.logging)

    try:
        records = read_records(args.events)
    except (OSError, ValueError) as e:
        logger.error("Failed to read events: %s", e)
        sys.exit(1)

    db_manager = DatabaseManager(config.database.database_path)
    await db_manager.create_tables()

    summary_repository = SQLiteSummaryRepository(db_manager.get_session)
    conversation_repository = SQLiteConversationRepository(db_manager.get_session)

    debug_llm_messages = bool(config.logging and config.logging.debug_llm_messages)
    decision_engine = LLMDecisionEngine(
        create_structured_generator(config),
        config.summary,
        debug_llm_messages=debug_llm_messages,
    )
    use_case = ProcessDigestUseCase(
        summary_repository=summary_repository,
        conversation_repository=conversation_repository,
        decision_maker=decision_engine,
    )

    queue = EventQueue()
    dispatcher = EventDispatcher()
    dispatcher.register_handler(DigestEventHandler(use_case).handle)
    event_loop = EventLoop(queue, dispatcher)
    loop_task = asyncio.create_task(event_loop.start())

    try:
        for record in records:
            record_type = record.get("type")
            if record_type == "conversation":
                try:
                    conversation = ConversationPayload.model_validate(record)
                except ValidationError as e:
                    logger.error("Invalid conversation record: %s", e)
                    continue
                await conversation_repository.save(conversation.to_conversation())
            elif record_type == "digest":
                await queue.enqueue(
                    Event(type=EventType.DIGEST, payload=record.get("payload") or {})
                )
            else:
                logger.warning("Skipping record of unknown type: %s", record_type)

        await event_loop.drain()
    finally:
        await event_loop.stop()
        loop_task.cancel()
        await asyncio.gather(loop_task, return_exceptions=True)
        await db_manager.close()

    logger.info(
        "Processed %d records, dispatched %d digest events",
        len(records),
        event_loop.processed_count,
    )


def run() -> None:
    """Run the async main function."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Shutting down...")


if __name__ == "__main__":
    run()
