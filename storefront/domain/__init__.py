"""Framework-free types: errors, permissions, request context and results."""
