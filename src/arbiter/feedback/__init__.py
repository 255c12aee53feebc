# topmark:header:start
#
#   project      : Arbiter
#   file         : __init__.py
#   file_relpath : src/arbiter/feedback/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Feedback arbitration: from stage reports to one `FeedbackDirective`.

Modules:
    directive: the output value and its closed category/outcome vocabularies.
    normalize: conversion of raw parse/runtime error payloads into explanations.
    classifier: ordered analyzer issue rules.
    cascade: the ordered arbitration rules and `arbitrate()`.
    presentation: helpers for the presentation/logging boundary.
"""
