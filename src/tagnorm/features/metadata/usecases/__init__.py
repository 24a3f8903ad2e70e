"""
Summary: Package exports for metadata use case helpers.
Why: Provide a stable namespace for dialect adapters and cover art selection.
"""
