"""Internship application portal."""
