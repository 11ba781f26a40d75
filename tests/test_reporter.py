# tests/test_reporter.py
import io

from breakin.models import Detection, Outcome
from breakin.reporter import Reporter


def detection(outcome, line="some line"):
    return Detection(line_number=1, outcome=outcome, user="12345", line=line)


def test_messages_per_outcome():
    out = io.StringIO()
    reporter = Reporter(out)

    reporter.report(detection(Outcome.BANNED_IP, "a"))
    reporter.report(detection(Outcome.ALREADY_FLAGGED, "b"))
    reporter.report(detection(Outcome.FREQUENCY_BREACH, "c"))
    reporter.report(detection(Outcome.BENIGN, "d"))
    reporter.report(detection(Outcome.AUTHORIZED, "e"))

    assert out.getvalue().splitlines() == [
        "Hacking due to banned IP. Line: a",
        "Hacking due to banned IP. Line: b",
        "Hacking due to frequency. Line: c",
    ]
    assert reporter.lines_processed == 5
    assert reporter.hacking_attempts == 3


def test_summary():
    out = io.StringIO()
    reporter = Reporter(out)
    reporter.report(detection(Outcome.BENIGN))
    reporter.report(detection(Outcome.BANNED_IP))

    text = reporter.summary()
    assert text == "Processed 2 lines. Found 1 possible hacking attempts."
    assert out.getvalue().endswith(text + "\n")


def test_empty_run_summary():
    out = io.StringIO()
    assert Reporter(out).summary() == "Processed 0 lines. Found 0 possible hacking attempts."


def test_hacking_count_follows_outcome():
    out = io.StringIO()
    reporter = Reporter(out)
    for outcome in Outcome:
        reporter.report(detection(outcome))

    assert reporter.hacking_attempts == sum(1 for o in Outcome if o.is_hacking)
    assert len(out.getvalue().splitlines()) == reporter.hacking_attempts
