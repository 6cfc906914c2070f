"""Desktop host for MOUTH TRAP."""
