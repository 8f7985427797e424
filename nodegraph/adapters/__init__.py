"""Conversions to and from other graph and table libraries."""
