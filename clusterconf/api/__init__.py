"""API components of the cluster."""
