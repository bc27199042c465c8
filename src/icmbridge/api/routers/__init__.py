"""Protected API routers."""
