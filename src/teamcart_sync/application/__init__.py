"""Application layer – dispatch, outbox draining and background work."""
