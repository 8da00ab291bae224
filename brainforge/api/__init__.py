"""HTTP and websocket surface of the BrainForge API."""
