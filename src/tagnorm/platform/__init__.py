"""Platform integrations shared by every feature."""
