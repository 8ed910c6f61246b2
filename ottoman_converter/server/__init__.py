"""HTTP API package: FastAPI front for the converter.

WHY: Non-Python clients need the converter over HTTP.

HOW: app.py defines the FastAPI app and routes, models.py the Pydantic
request/response schemas.
"""
