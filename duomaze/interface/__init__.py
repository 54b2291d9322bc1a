"""Terminal front ends: renderer, key parser and Textual app."""
