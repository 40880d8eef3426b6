"""PyQt6 adapters for the game layer's presentation boundary."""
