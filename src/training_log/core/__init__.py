"""Core training-log logic: models, aggregation and progression."""
