"""Reference frameworks (framework catalogue, Belbin team roles)."""
