# topmark:header:start
#
#   project      : Arbiter
#   file         : __main__.py
#   file_relpath : src/arbiter/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for Arbiter.

Examples:
    Arbitrate a report bundle using the module interface::

        python -m arbiter arbitrate reports.json
"""

from __future__ import annotations

from arbiter.cli.main import cli

if __name__ == "__main__":
    cli()
