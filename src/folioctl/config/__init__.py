"""Configuration layer — folio.toml discovery, settings, logging."""
