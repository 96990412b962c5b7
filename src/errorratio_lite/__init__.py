"""errorratio-lite: error-to-success ratios per (user, endpoint) pair."""
