"""turnsolver - anytime search core for turn-based game bots."""

__version__ = "0.1.0"
