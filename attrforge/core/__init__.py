"""Core data models for attrforge."""
