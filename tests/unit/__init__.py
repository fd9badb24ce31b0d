"""Unit tests for individual components in isolation.

Responders are replaced by test doubles whose completions the test
releases explicitly, so every asynchronous interleaving is deterministic.
"""
