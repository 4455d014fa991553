"""
Test suite for climate-futures

Unit tests for the parser, fallback table, constraint engine, stores and
pipeline, plus API and CLI tests run against an in-memory store and a
scripted completion client (no network calls).
"""
