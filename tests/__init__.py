"""Tests for fadm."""
