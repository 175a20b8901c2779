"""Adapters – Redis, SQLAlchemy and FCM implementations of the ports."""
