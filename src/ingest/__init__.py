"""Payload ingestion pipeline.

This package turns JSON, CSV, and XML payloads into flat records.
It prepares record batches for the store layer.
"""
