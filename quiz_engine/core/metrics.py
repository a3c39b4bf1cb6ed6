"""Engine metrics using the Prometheus client library.

All metrics are defined here so the inventory lives in one place; the
authoring and assessment services import and increment them at the point
of action.  Exposing them (an HTTP /metrics endpoint or a push gateway) is
up to the host application.
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

# ---------------------------------------------------------------------------
# Authoring
# ---------------------------------------------------------------------------

STEP_VALIDATION_FAILURES = Counter(
    "quiz_step_validation_failures_total",
    "Wizard step gates that refused to advance",
    ["step"],  # "1".."4"
)

QUIZ_PUBLISHES = Counter(
    "quiz_publishes_total",
    "Publish requests by result",
    ["result"],  # "published" or "rejected"
)

DRAFTS_SAVED = Counter(
    "quiz_drafts_saved_total",
    "Quiz drafts persisted by the authoring workflow",
)

# ---------------------------------------------------------------------------
# Assessment
# ---------------------------------------------------------------------------

ATTEMPTS_STARTED = Counter(
    "quiz_attempts_started_total",
    "Assessment sessions successfully started",
)

ATTEMPTS_REFUSED = Counter(
    "quiz_attempts_refused_total",
    "Assessment sessions refused at start",
    ["reason"],  # "not_published" or "attempt_limit"
)

ATTEMPTS_SUBMITTED = Counter(
    "quiz_attempts_submitted_total",
    "Sealed attempts by outcome",
    ["outcome"],  # "passed" or "failed"
)

ATTEMPT_SCORE = Histogram(
    "quiz_attempt_score_percent",
    "Percent score of submitted attempts",
    buckets=[10, 20, 30, 40, 50, 60, 70, 80, 90, 100],
)
