# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""
qkrump-engine: measurement decoding and report rendering.

Subpackages
-----------
- qkrump_engine.results: Job result and metadata model
- qkrump_engine.decoder: Bitstring to krump move decoding
- qkrump_engine.render: SVG report composition
- qkrump_engine.assets: Branding asset resolution
- qkrump_engine.config: Environment configuration
- qkrump_engine.errors: Exception hierarchy
- qkrump_engine.cli: ``qkrump`` command-line interface
"""

from importlib.metadata import PackageNotFoundError, version


try:
    __version__ = version("qkrump")
except PackageNotFoundError:
    __version__ = "0.0.0"
