"""Core sync primitives (message envelopes and delivery targets).

Kept free of FastAPI concerns so the engine can be driven directly by tests.
"""
