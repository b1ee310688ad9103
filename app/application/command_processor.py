"""Application layer: `/location` entry point (parse, execute, format)."""
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.formatter import format_result
from app.application.handlers import get_handler
from app.domain.command_parser import CommandParser, default_parser
from app.domain.commands import Command, CommandResult, Failure, FailureKind
from app.infrastructure.repositories import SqlAlchemyStatusRepository, StatusRepository

logger = logging.getLogger(__name__)


class LocationCommandProcessor:
    """Runs one `/location` command per call inside a single transaction."""

    def __init__(self, repo: StatusRepository, parser: Optional[CommandParser] = None):
        self.repo = repo
        self.parser = parser or default_parser

    @classmethod
    def for_session(cls, db: Session) -> "LocationCommandProcessor":
        return cls(SqlAlchemyStatusRepository(db))

    def execute(self, command: Command) -> CommandResult:
        handler = get_handler(command)
        try:
            with self.repo.transaction() as repo:
                return handler.handle(command, repo)
        except SQLAlchemyError as e:
            logger.error(f"Store error while running {type(command).__name__}: {e}", exc_info=True)
            return Failure(FailureKind.STORE_ERROR)

    def process(self, text: str) -> str:
        command = self.parser.parse(text)
        logger.info(f"[LOCATION_CMD] {type(command).__name__} from '{text}'")
        return format_result(self.execute(command))
