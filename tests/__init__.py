"""Tests for arfftools; shared paths and helpers live in ``arfftools.utils.testing``."""
