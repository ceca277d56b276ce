"""Hospital management back office API."""
