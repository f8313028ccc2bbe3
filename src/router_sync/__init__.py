"""Keep an mc-router routing table in sync with Docker containers and a YAML config."""
