"""Generate PlantUML entity diagrams from relational database schemas."""
