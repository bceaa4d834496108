"""Collaborator implementations for the comparison engine's protocols."""
