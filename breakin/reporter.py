# breakin/reporter.py
import sys
from typing import Optional, TextIO

from .models import Detection, Outcome

BANNED_MESSAGE = "Hacking due to banned IP. Line: {line}"
FREQUENCY_MESSAGE = "Hacking due to frequency. Line: {line}"
SUMMARY_MESSAGE = "Processed {lines} lines. Found {hacking} possible hacking attempts."

# Already flagged users are reported with the banned IP wording
MESSAGES = {
    Outcome.BANNED_IP: BANNED_MESSAGE,
    Outcome.ALREADY_FLAGGED: BANNED_MESSAGE,
    Outcome.FREQUENCY_BREACH: FREQUENCY_MESSAGE,
}


class Reporter:
    """Write one message per hacking attempt and a final summary line."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.lines_processed = 0
        self.hacking_attempts = 0

    def report(self, detection: Detection) -> None:
        self.lines_processed += 1

        if not detection.outcome.is_hacking:
            return

        self.hacking_attempts += 1
        template = MESSAGES[detection.outcome]
        self.stream.write(template.format(line=detection.line) + "\n")

    def summary(self) -> str:
        text = SUMMARY_MESSAGE.format(
            lines=self.lines_processed,
            hacking=self.hacking_attempts,
        )
        self.stream.write(text + "\n")
        self.stream.flush()
        return text
