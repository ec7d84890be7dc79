"""faasctl commands."""
