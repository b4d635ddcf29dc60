"""
Lumina Assembly Test Suite

Tests for the persistence layer: save/load through MemoryStorage and
FileStorage, the default-document fallback, and the JSON codec.
"""
