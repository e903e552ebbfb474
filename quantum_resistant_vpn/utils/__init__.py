"""
Utility functions for the quantum-resistant VPN tool.
"""

from .secure_file import SecureFile

__all__ = ['SecureFile']
