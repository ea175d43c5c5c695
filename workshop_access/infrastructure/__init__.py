"""Infrastructure: decision cache, invalidation messaging, in-memory directories."""
