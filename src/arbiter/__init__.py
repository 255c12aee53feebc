# topmark:header:start
#
#   project      : Arbiter
#   file         : __init__.py
#   file_relpath : src/arbiter/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Arbiter package.

Arbiter decides which single piece of feedback a student sees after a
check cycle. It combines the reports of the verifier, the parser, the
instructor feedback script, the static analyzer and the student's own run
into one `FeedbackDirective`, honoring per-stage and per-issue suppression.
"""

from __future__ import annotations

from arbiter.config.model import MutableSuppressions, Suppressions
from arbiter.feedback.cascade import arbitrate
from arbiter.feedback.classifier import classify_analyzer_issues
from arbiter.feedback.directive import Category, FeedbackDirective, Outcome
from arbiter.feedback.normalize import normalize_parse_error, normalize_runtime_error
from arbiter.feedback.presentation import present_message
from arbiter.reports.model import Reports

__all__ = [
    "Category",
    "FeedbackDirective",
    "MutableSuppressions",
    "Outcome",
    "Reports",
    "Suppressions",
    "arbitrate",
    "classify_analyzer_issues",
    "normalize_parse_error",
    "normalize_runtime_error",
    "present_message",
]
