"""taskboard - to-do list client core with optimistic updates and view derivation."""
