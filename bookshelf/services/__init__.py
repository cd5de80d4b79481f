"""Local collaborators used by the manager."""
