"""Sample plugin fixture: an echo endpoint type and a default service."""
