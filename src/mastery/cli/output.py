# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Output formatting for CLI commands."""

from __future__ import annotations

import json
import sys
from typing import Any


def output_result(data: Any, output_format: str = "json") -> None:
    """Print a command result.

    ``json`` pretty-prints the whole payload; ``text`` prints one line per
    top-level key, falling back to JSON for anything that is not a dict.
    """
    if output_format == "text" and isinstance(data, dict):
        for key, value in data.items():
            if isinstance(value, (dict, list)):
                value = json.dumps(value, default=str)
            print(f"{key}: {value}")
    else:
        print(json.dumps(data, indent=2, default=str))


def output_error(message: str) -> None:
    """Print error message to stderr."""
    print(f"Error: {message}", file=sys.stderr)
