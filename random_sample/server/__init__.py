"""HTTP service for random library samples."""
