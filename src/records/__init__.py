"""
Records front-end core.

A pure state controller (records.controller) keeps a sorted, paginated list of
remote records in sync with a local edit form; records.runtime runs it on an
asyncio loop against the async RecordServiceClient (records.client).
"""
