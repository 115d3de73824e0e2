"""Version history and redline comparison for requirements and test cases."""
