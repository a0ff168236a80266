"""fleet_records.observability: structlog configuration and request context."""
