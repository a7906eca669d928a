"""Qt application around the map view."""
