"""Domain layer: entities, categorization, CSV ingestion and insights."""
