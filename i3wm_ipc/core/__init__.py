"""Wire framing, payload decoding and socket clients."""
