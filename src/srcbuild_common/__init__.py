"""Shared utilities for srcbuild packages."""
