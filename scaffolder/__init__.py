"""Scaffolder template preparation.

This package prepares local working copies of software templates before
they are rendered, providing:
- Location annotation parsing and Git URL handling
- GitLab integration configuration with per-host tokens
- Preparer strategies for remote Git and local file locations
- A protocol-keyed registry that selects the right preparer
"""
