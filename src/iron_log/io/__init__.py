"""JSONL history storage and record serialization."""
