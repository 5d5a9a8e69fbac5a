"""HTTP/WebSocket surface over a running simulation."""
