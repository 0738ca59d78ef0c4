"""Match highlight story-pack generation service."""
