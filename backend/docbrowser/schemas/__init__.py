"""Schemas: Pydantic response models at the HTTP boundary."""
