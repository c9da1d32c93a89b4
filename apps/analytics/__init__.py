"""Admin dashboard statistics, reports and the health check."""
