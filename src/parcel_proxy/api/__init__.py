"""
API Package

FastAPI application exposing the county records proxy endpoints.
"""
