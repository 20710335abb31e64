# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Mastery CLI - scenario replay and settings inspection."""

from .main import app, main

__all__ = ["main", "app"]
