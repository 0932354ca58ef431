"""Tests for the Circadian Zones integration."""
