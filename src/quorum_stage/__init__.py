"""Quorum Stage: moderation and voting engine for a community Q&A backend."""
