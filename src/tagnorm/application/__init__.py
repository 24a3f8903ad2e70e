"""Application services coordinating features with files on disk."""
