"""Relay for read-only Google Sheets access with caller-supplied service accounts."""
