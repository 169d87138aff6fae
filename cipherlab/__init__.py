"""Classical cipher lab: educational classical cipher service."""
