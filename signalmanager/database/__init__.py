"""Record and payload types for clients, rooms and WebRTC sessions."""