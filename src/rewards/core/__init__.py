"""Configuration, persistence and cross-cutting primitives."""
