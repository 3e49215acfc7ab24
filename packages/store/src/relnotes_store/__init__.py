"""Record store backends for the release-notes engine."""
