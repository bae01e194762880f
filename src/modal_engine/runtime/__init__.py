"""Runtime services: logging and tracing."""
