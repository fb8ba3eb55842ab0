"""Bundled data files for winprov."""
