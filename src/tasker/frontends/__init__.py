"""Frontends - user interfaces built on tasker.core."""
