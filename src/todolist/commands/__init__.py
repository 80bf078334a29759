"""Command-line view controller for todolist."""
