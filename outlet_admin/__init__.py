"""Back-office API for hotel, restaurant and travel outlets."""
