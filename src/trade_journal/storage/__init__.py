"""Persistence for journal trades and settings (SQLAlchemy async) plus CSV import."""
