"""Pydantic models for records, forms and views."""
