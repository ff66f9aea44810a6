#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/typmark/utils/__init__.py
"""Utility helpers for typmark."""
