"""Logging and metrics for kubesnap."""
