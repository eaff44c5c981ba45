"""Training pipelines for FeedForwardNet."""
