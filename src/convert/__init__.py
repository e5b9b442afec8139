"""Streaming CSV to JSON conversion.

This package parses CSV rows into header-keyed records and hands them
one at a time to a writer that assembles the JSON array incrementally.
"""
