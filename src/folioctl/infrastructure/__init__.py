"""Infrastructure layer — filesystem discovery, content store, templates.

This layer touches disk. The service layer bridges between it and the
pure domain models.
"""
