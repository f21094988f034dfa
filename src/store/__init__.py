"""Index store layer.

This package loads flat records into a backing search index.
It owns the store contract, the Solr client, and batch ingestion.
"""
