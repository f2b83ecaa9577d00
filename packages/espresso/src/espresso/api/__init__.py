"""JSON endpoints of the inspector server."""
