"""Testing – in-memory doubles for every pipeline port."""
