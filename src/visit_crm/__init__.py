"""Customer visit tracking with a local store and an optional Supabase mirror."""

__version__ = "0.1.0"
