"""Assemblage - rules engine for the tile-connection card game."""
