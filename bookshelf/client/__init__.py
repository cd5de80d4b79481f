"""Remote service clients."""
