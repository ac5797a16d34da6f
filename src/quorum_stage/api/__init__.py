"""HTTP API for the Quorum application."""
