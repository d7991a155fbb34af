"""Parent-child play session transcription services."""
