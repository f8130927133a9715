"""Shared configuration, settings, logging and error types."""
