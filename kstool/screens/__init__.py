"""Screens for KSTool."""
