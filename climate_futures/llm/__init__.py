"""Completion client and prompt templates."""
