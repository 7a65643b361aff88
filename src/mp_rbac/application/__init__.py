"""Application – collaborators around the registry core."""
