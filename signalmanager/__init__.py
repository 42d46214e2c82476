"""Building blocks for a WebRTC signalling service: authentication, record types and a Cloudflare Realtime client."""

__version__ = "0.1.0"