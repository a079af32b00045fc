# Schemas package init
"""Pydantic request/response models: partners, requests, acknowledgments, errors."""
