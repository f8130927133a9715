"""Catalog entity models consumed by the scaffolder."""
