"""
Shared utilities for mail intelligence processing.
"""
