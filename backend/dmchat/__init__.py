"""dmchat - direct-message chat backend with realtime delivery."""
