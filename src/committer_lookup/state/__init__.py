"""Persistent committer cache."""
