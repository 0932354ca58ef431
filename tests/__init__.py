"""Tests for custom integrations."""
