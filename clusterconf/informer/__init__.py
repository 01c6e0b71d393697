"""Informer components, which report metrics about the local peer."""
