"""Note resolution, classification, aggregation and credits."""
