"""Template preparation stage.

Preparers fetch a template's source files into a fresh temporary
directory before rendering. One preparer handles each location protocol:
- gitlab, gitlab/api, url: clone a remote Git repository
- file: copy a directory from the local filesystem

The Preparers registry picks the preparer for a template from its
managed-by location annotation.
"""
