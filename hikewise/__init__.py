"""Hikewise: hiking conditions aggregation backend."""
