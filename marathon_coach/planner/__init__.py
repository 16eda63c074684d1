"""Chunked plan generation against an external workout producer."""
