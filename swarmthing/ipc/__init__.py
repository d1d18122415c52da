"""Agent-to-agent transport: message envelope, gateway and HTTP listener."""
