"""
Pydantic request/response schemas for the TeachHub API.

Fields are snake_case in Python and camelCase on the wire.
"""
