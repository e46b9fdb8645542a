"""
Unit Tests - Testing Individual Components in Isolation.

Each component is tested with fake capabilities and a manual clock.
Unit tests should be fast, deterministic, and focused.
"""
