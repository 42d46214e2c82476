"""Cloudflare Realtime session API client, models and session manager."""