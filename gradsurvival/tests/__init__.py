"""Tests for the grad school survival engine."""
