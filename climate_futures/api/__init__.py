"""climate-futures HTTP API."""
