"""Test suite for stablesocket."""
