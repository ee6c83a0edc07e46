"""Tests for Arcade 2048."""
