"""Internal helpers for gitclient backends."""
