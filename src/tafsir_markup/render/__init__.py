"""Consumer-side helpers for handing canonical markup to a renderer."""
