"""GUI-agnostic core: node model, providers, host interfaces and ingestion."""
