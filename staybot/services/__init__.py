"""Session, browser and booking services."""
