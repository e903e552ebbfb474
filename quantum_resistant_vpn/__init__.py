"""
Quantum Resistant VPN.

This package provides the cryptographic engine of a VPN management tool with
classic, post-quantum and hybrid encryption suites.
"""

import logging

import oqs  # type: ignore

logger = logging.getLogger(__name__)

LIBOQS_VERSION = oqs.oqs_version()
logger.debug(f"Loaded OQS version {LIBOQS_VERSION}")

# Package version
__version__ = "0.1.0"
