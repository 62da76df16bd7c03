"""HTTP API for the Technofest registration service."""
