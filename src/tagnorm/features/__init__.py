"""Feature packages for tag normalization and beat grid handling."""
