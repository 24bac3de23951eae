"""Runtime services: observability."""
