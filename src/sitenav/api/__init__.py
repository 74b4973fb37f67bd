"""HTTP API for Sitenav."""
