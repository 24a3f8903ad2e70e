"""User interfaces for tagnorm."""
