"""Vocabulary progress engine service."""
