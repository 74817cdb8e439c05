"""Data models for subnet inventory and occupancy."""
