"""Domain layer - engine-independent descriptions of tables, types and messages."""
