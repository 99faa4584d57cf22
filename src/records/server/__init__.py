"""
Local record service: a FastAPI app exposing one or more record collections
with sorting and cursor pagination, for development and tests.

Run with:
    uvicorn records.server.main:app --port 8888
"""
