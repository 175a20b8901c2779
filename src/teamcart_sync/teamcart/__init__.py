"""Team cart – events, the CartView projection and its handlers."""
