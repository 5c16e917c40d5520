"""Application object, shared context and the event bus."""
