"""Environment-driven configuration (PROPMAP_* variables). See `env.py`."""
