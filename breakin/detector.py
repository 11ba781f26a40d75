# breakin/detector.py

import logging
from collections import Counter
from typing import Dict, FrozenSet, Iterable, List

from .models import LoginAttempt, Outcome
from .parsers import (
    DEFAULT_YEAR,
    FAILED_MARKER,
    extract_user,
    is_failed_attempt,
    to_seconds,
)

logger = logging.getLogger(__name__)


class BreakinDetector:
    """
    Classify sshd log lines as break-in attempts.

    Rules, first match wins:
      1. line contains an authorized user token -> AUTHORIZED
      2. line contains a banned IP token        -> BANNED_IP
      3. user was flagged earlier               -> ALREADY_FLAGGED
      4. user failed too often too quickly      -> FREQUENCY_BREACH (flags user)
      5. anything else                          -> BENIGN

    Lines must be passed in log order, the per-user state depends on it.
    One instance per run; it is not safe to share between threads.
    """

    def __init__(
        self,
        authorized_users: Iterable[str] = (),
        banned_ips: Iterable[str] = (),
        window_seconds: int = 20,
        failure_threshold: int = 3,
        year: int = DEFAULT_YEAR,
        failure_marker: str = FAILED_MARKER,
    ) -> None:
        self.authorized_users: FrozenSet[str] = frozenset(authorized_users)
        self.banned_ips: FrozenSet[str] = frozenset(banned_ips)
        self.window_seconds = window_seconds
        self.failure_threshold = failure_threshold
        self.year = year
        self.failure_marker = failure_marker

        self._flagged: Dict[str, bool] = {}
        self._history: Dict[str, List[LoginAttempt]] = {}
        self._counts: Counter = Counter()

    @classmethod
    def from_config(cls, config, authorized_users, banned_ips) -> "BreakinDetector":
        return cls(
            authorized_users=authorized_users,
            banned_ips=banned_ips,
            window_seconds=config.window_seconds,
            failure_threshold=config.failure_threshold,
            year=config.reference_year,
            failure_marker=config.failure_marker,
        )

    @property
    def lines_processed(self) -> int:
        return sum(self._counts.values())

    @property
    def outcome_counts(self) -> Counter:
        return Counter(self._counts)

    def is_flagged(self, user: str) -> bool:
        return self._flagged.get(user, False)

    def classify(self, line: str) -> Outcome:
        """Classify one log line and update the per-user state."""
        outcome = self._evaluate(line)
        self._counts[outcome] += 1
        return outcome

    def _evaluate(self, line: str) -> Outcome:
        if self._contains_any(line, self.authorized_users):
            return Outcome.AUTHORIZED

        if self._contains_any(line, self.banned_ips):
            return Outcome.BANNED_IP

        user = extract_user(line)
        if self.is_flagged(user):
            return Outcome.ALREADY_FLAGGED

        if self._frequency_breach(user, line):
            self._flagged[user] = True
            logger.info("User %r flagged for login frequency", user)
            return Outcome.FREQUENCY_BREACH

        return Outcome.BENIGN

    @staticmethod
    def _contains_any(line: str, tokens: FrozenSet[str]) -> bool:
        # substring match against the raw text, not a parsed field
        return any(token in line for token in tokens)

    def _frequency_breach(self, user: str, line: str) -> bool:
        failed = is_failed_attempt(line, self.failure_marker)
        history = self._history.setdefault(user, [])
        history.append(LoginAttempt(to_seconds(line, self.year), failed))

        if len(history) < self.failure_threshold:
            return False

        # a retained success only seeds the window timing, it is not a failure
        streak = 1 if history[0].failed else 0
        if streak >= self.failure_threshold:
            del history[0]
            return True

        for older, newer in zip(history, history[1:]):
            if abs(newer.timestamp - older.timestamp) <= self.window_seconds and failed:
                streak += 1
            else:
                # streak broken: keep only the current attempt
                logger.debug("Login streak reset for user %r", user)
                del history[:-1]
                return False

            if streak >= self.failure_threshold:
                # slide the window so the next attempt is not flagged on stale data
                del history[0]
                return True

        return False
