"""Marketplace API: users, sessions and classified ads."""
