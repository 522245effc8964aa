"""Official Finder: locate public officials from partial clues."""
