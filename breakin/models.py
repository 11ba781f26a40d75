# breakin/models
from dataclasses import dataclass
from enum import Enum


class Outcome(Enum):
    AUTHORIZED = "authorized"
    BANNED_IP = "banned_ip"
    ALREADY_FLAGGED = "already_flagged"
    FREQUENCY_BREACH = "frequency_breach"
    BENIGN = "benign"

    @property
    def is_hacking(self) -> bool:
        """True for the outcomes counted as possible hacking attempts."""
        return self in (
            Outcome.BANNED_IP,
            Outcome.ALREADY_FLAGGED,
            Outcome.FREQUENCY_BREACH,
        )


@dataclass(frozen=True)
class LoginAttempt:
    timestamp: int           # epoch seconds in the reference year
    failed: bool = True      # line carried the failure marker


@dataclass(frozen=True)
class UrlParts:
    hostname: str
    port: str = "80"
    path: str = "/"


@dataclass(frozen=True)
class Detection:
    line_number: int
    outcome: Outcome
    user: str = ""
    line: str = ""           # original log line, unmodified
