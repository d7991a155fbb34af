"""Caller-side transcription: adapters, fallback orchestration and the queue worker."""
