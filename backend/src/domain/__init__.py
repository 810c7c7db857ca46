"""Pure domain logic: text normalization, catalog ingestion, matching."""
