"""Tests for the wildfire_ca package."""
