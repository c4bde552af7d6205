"""Web API for the study dashboard."""
