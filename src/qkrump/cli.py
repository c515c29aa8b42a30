# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""
Command-line interface entry point.

This module is registered as a console script (``qkrump``) and
delegates to the engine's CLI implementation.
"""

from __future__ import annotations


def main() -> None:
    """Run the ``qkrump`` CLI."""
    from qkrump_engine.cli import main as core_main

    core_main()


if __name__ == "__main__":
    main()
