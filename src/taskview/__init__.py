"""Client-side task list viewer with cache-first sync."""
