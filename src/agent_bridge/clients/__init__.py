"""Clients for hosted model APIs."""
