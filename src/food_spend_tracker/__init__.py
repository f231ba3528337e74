"""Household food spend tracker."""
