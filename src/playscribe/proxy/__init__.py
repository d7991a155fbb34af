"""Anonymizing transcription proxy service."""
