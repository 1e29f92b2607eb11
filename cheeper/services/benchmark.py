import logging
import time
from typing import List, Optional

from sqlalchemy.orm import Session

from cheeper.core.config import settings
from cheeper.core.database import utcnow
from cheeper.repositories.message import MessageRepository
from cheeper.repositories.user import UserRepository
from cheeper.schemas.benchmark import BenchmarkReport
from cheeper.utils.exceptions import ValidationError
from cheeper.utils.validation import validate_positive

logger = logging.getLogger(__name__)


class BenchmarkService:
    """Sequential insert and point-read latency measurements"""

    def __init__(self, db: Session, seed_login: Optional[str] = None):
        self.db = db
        self.seed_login = seed_login or settings.BENCHMARK_SEED_LOGIN
        self.message_repo = MessageRepository(db)
        self.user_repo = UserRepository(db)

    def benchmark_insert(self, n: int) -> float:
        """Seconds spent saving n messages one by one; building them is not timed"""
        validate_positive(n, "n")
        user = self.user_repo.get_by_login(self.seed_login)
        now = utcnow()
        messages = [
            self.message_repo.build(user.id, f"message number {i}", now)
            for i in range(n)
        ]

        start = time.perf_counter()
        for message in messages:
            self.message_repo.save(message)
        elapsed = time.perf_counter() - start

        logger.info(f"Inserted {n} messages in {elapsed:.6f}s")
        return elapsed

    def benchmark_read(self, n: int, message_id: Optional[str] = None) -> float:
        """Seconds spent on n point lookups of one message, results discarded"""
        validate_positive(n, "n")
        message_id = message_id or settings.BENCHMARK_MESSAGE_ID or self._default_message_id()
        # Fail before timing if the message is missing
        self.message_repo.get_by_id(message_id)

        start = time.perf_counter()
        for _ in range(n):
            self.message_repo.fetch_raw(message_id)
        elapsed = time.perf_counter() - start

        logger.info(f"Read message {message_id} {n} times in {elapsed:.6f}s")
        return elapsed

    def benchmark_series(self, counts: List[int], reading: bool) -> List[float]:
        if not counts:
            raise ValidationError("The list of request counts must not be empty")
        run = self.benchmark_read if reading else self.benchmark_insert
        return [run(n) for n in counts]

    def benchmark_all(self, counts: Optional[List[int]] = None) -> BenchmarkReport:
        """Write series followed by read series over the same request counts"""
        counts = list(counts if counts is not None else settings.BENCHMARK_REQUEST_COUNTS)
        write_seconds = self.benchmark_series(counts, reading=False)
        read_seconds = self.benchmark_series(counts, reading=True)
        return BenchmarkReport(
            request_counts=counts,
            write_seconds=write_seconds,
            read_seconds=read_seconds
        )

    def _default_message_id(self) -> str:
        user = self.user_repo.get_by_login(self.seed_login)
        return self.message_repo.first_for_user(user.id).id
