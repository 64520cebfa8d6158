"""Domain layer — document records, slugs, tags, stylesheet model.

This layer depends only on stdlib, pydantic, ruamel.yaml, and tinycss2.
It must never import from services, infrastructure, commands, or config.
"""
