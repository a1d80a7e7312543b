"""NiceGUI presentation-layer stand-in."""
