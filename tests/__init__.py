"""Test suite for the chip tracker."""
