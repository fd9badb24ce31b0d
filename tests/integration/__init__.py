"""Integration tests running real requests through the FastAPI app.

Uses the simulated responder with zero latency, so no API key is needed.
"""
