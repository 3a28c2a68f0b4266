"""Container format, error taxonomy and the seal/open operations."""
