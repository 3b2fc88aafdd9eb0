"""Core document model, content massaging and serialization for Atom feeds."""
