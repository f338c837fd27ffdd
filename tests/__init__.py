"""Tests for the GamblingDen engine."""
