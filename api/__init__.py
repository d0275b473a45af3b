"""
API Package Initialization

Provides the FastAPI application exposing the mail intelligence analyses.
"""
