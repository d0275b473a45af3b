"""
API Routes Package

Centralizes route management with explicit imports.
"""

from api.routes import analysis

__all__ = ["analysis"]
